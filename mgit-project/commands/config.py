# The command: mgit config <key> <value>
# What it does: A user-facing command to set a configuration key-value pair (e.g., user.name)
# How it does: It passes the key and value to `write_config` in `utils/config.py`, which handles the file I/O and parsing logic
# What data structure it uses: None directly, but it provides the interface to the underlying Map / Dictionary structure managed by `utils/config.py`

import sys

from utils import repository, config as config_utils


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    try: # Set the configuration key-value pair
        config_utils.write_config(repo, args.key, args.value)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Set {args.key} to '{args.value}'")
