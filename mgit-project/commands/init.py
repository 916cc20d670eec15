# The command: mgit init
# What it does: Initializes a new, empty repository by creating the metadata directory (`.mgit` by default) and its internal structure
# How it does: It creates the `objects`, `refs` and `hooks` subdirectories, the default `config`, `description` and `info/exclude` files, and a `HEAD` holding a symbolic reference to the unborn 'main' branch
# What data structure it uses: Tree (the file system directory structure is a tree). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

import os

from utils import repository, config as config_utils

DESCRIPTION = "Unnamed repository; edit this file 'description' to name the repository.\n"

HOOK_SAMPLES = {
    'pre-commit.sample': (
        "#!/bin/sh\n"
        "# Pre-commit hook example\n"
        "# Remove .sample extension to activate\n"
        "\n"
        "echo \"Running pre-commit checks...\"\n"
        "exit 0\n"
    ),
    'commit-msg.sample': (
        "#!/bin/sh\n"
        "# Commit-msg hook example\n"
        "# Remove .sample extension to activate\n"
        "\n"
        "exit 0\n"
    ),
}

EXCLUDE = (
    "# mgit ls-files --others --exclude-from=.mgit/info/exclude\n"
    "# Lines that start with '#' are comments.\n"
    "# *.[oa]\n"
    "# *~\n"
)

SUBDIRECTORIES = [
    ('objects', 'info'),
    ('objects', 'pack'),
    ('refs', 'heads'),
    ('refs', 'tags'),
    ('hooks',),
    ('info',),
]


def init_repository(path='.', meta_dir=repository.DEFAULT_META_DIR, default_branch=repository.DEFAULT_BRANCH):
    """Create the repository structure under ``path``.

    Returns ``(repo, created)``; ``created`` is False when the metadata
    directory already existed and nothing was touched.
    """
    repo = repository.Repository(path, meta_dir)
    if repo.exists():
        return repo, False

    for parts in SUBDIRECTORIES:
        os.makedirs(repo.path(*parts), exist_ok=True)

    config_utils.write_default_config(repo)
    with open(repo.path('description'), 'w') as f:
        f.write(DESCRIPTION)
    repository.set_head_branch(repo, default_branch)
    for name, body in HOOK_SAMPLES.items():
        with open(repo.path('hooks', name), 'w') as f:
            f.write(body)
    with open(repo.path('info', 'exclude'), 'w') as f:
        f.write(EXCLUDE)

    return repo, True


def run(args):
    repo, created = init_repository(os.getcwd(), args.meta_dir)
    if created:
        print(f"Initialized empty mgit repository in {repo.meta_path}/")
    else:
        print(f"Reinitialized existing mgit repository in {repo.meta_path}/ (nothing changed)")
