# What it does: Implements `.mgitignore` / `info/exclude` handling and lists the files of the working tree
# What data structure it uses: Set (to store the ignore patterns), and a Tree Traversal of the working directory with os.walk

import os
from fnmatch import fnmatch

IGNORE_FILE = '.mgitignore'
ALWAYS_SKIPPED_DIRS = {'.git', 'node_modules', '__pycache__'}


def _read_patterns(path):
    patterns = set()
    if os.path.exists(path):
        with open(path, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    patterns.add(line)
    return patterns


def get_ignored_patterns(repo):
    """
    Reads .mgitignore and info/exclude and returns a set of glob patterns.
    """
    patterns = {'*.pyc'} # Always ignore these
    patterns |= _read_patterns(os.path.join(repo.root, IGNORE_FILE))
    patterns |= _read_patterns(repo.path('info', 'exclude'))
    return patterns


def is_ignored(path, ignore_patterns): # Returns True if the path matches any ignore pattern
    for pattern in ignore_patterns:
        if fnmatch(path, pattern) or any(fnmatch(part, pattern) for part in path.split('/')):
            return True
    return False


def list_working_files(repo, ignore_patterns=None): # Returns sorted repository-relative paths of every non-ignored file
    if ignore_patterns is None:
        ignore_patterns = get_ignored_patterns(repo)
    skipped = ALWAYS_SKIPPED_DIRS | {repo.meta_dir}

    working_files = []
    for root, dirs, files in os.walk(repo.root):
        dirs[:] = [d for d in dirs if d not in skipped]
        for name in files:
            rel_path = os.path.relpath(os.path.join(root, name), repo.root).replace(os.sep, '/')
            if not is_ignored(rel_path, ignore_patterns):
                working_files.append(rel_path)
    return sorted(working_files)
