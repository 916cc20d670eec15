# What it does: Provides the repository context object and the functions that manage HEAD and branch pointers
# How it does: A Repository holds the working-tree root and the metadata directory name, and every other module builds its paths through it. HEAD and the files in `refs/heads` are read and rewritten here
# What data structure it uses: Uses recursion (specifically, linear recursion) to find the repo root. Conceptually, it manages pointers (the `HEAD` file and branch files), which are fundamental components of data structures like Graphs and Linked Lists

import os
import re

from .errors import (
    NotARepositoryError, InvalidReferenceError, InvalidBranchNameError, BranchExistsError,
)

DEFAULT_META_DIR = '.mgit'
DEFAULT_BRANCH = 'main'
HEADS_PREFIX = 'refs/heads/'

_INVALID_BRANCH_CHARS = re.compile(r'[~^:?*\[\]\\]|\s')
_HEX_RE = re.compile(r'^[0-9a-f]{4,40}$')


class Repository:
    """A working tree plus its metadata directory.

    All paths handed around by the rest of the code are relative to ``root``
    and use ``/`` as separator; ``work_path`` turns them into OS paths.
    """

    def __init__(self, root, meta_dir=DEFAULT_META_DIR):
        self.root = os.path.abspath(root)
        self.meta_dir = meta_dir

    @property
    def meta_path(self):
        return os.path.join(self.root, self.meta_dir)

    def path(self, *parts):
        return os.path.join(self.meta_path, *parts)

    def work_path(self, rel_path):
        return os.path.join(self.root, *rel_path.split('/'))

    def exists(self):
        return os.path.isdir(self.meta_path)

    def __repr__(self):
        return f"Repository({self.root!r}, meta_dir={self.meta_dir!r})"


def find_repo_root(path='.', meta_dir=DEFAULT_META_DIR): # Recursively searches for the metadata directory to find the repository root
    path = os.path.abspath(path)
    if os.path.isdir(os.path.join(path, meta_dir)):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path, meta_dir)


def find_repo(path='.', meta_dir=DEFAULT_META_DIR):
    root = find_repo_root(path, meta_dir)
    if root is None:
        raise NotARepositoryError(meta_dir)
    return Repository(root, meta_dir)


def _read_text(file_path):
    if not os.path.isfile(file_path):
        return None
    with open(file_path, 'r') as f:
        return f.read().strip()


def read_head(repo): # Returns the raw HEAD content, e.g. 'ref: refs/heads/main' or a commit hash
    return _read_text(repo.path('HEAD'))


def get_current_branch(repo): # Retrieves the name of the current branch HEAD points to, or None if in detached HEAD state
    head_content = read_head(repo)
    if head_content and head_content.startswith('ref: ' + HEADS_PREFIX):
        return head_content[len('ref: ' + HEADS_PREFIX):].strip()
    return None


def get_head_ref(repo): # Returns 'refs/heads/<branch>' for a symbolic HEAD, else None
    head_content = read_head(repo)
    if head_content and head_content.startswith('ref: '):
        return head_content.split(' ', 1)[1].strip()
    return None


def read_ref(repo, ref):
    value = _read_text(repo.path(*ref.split('/')))
    return value or None


def get_head_commit(repo): # Retrieves the commit hash that HEAD points to, or None if there are no commits
    head_content = read_head(repo)
    if not head_content:
        return None
    if head_content.startswith('ref: '):
        return read_ref(repo, head_content.split(' ', 1)[1].strip())
    return head_content


def get_branch_commit(repo, branch_name): # Retrieves the commit hash a branch points to, or None if the branch doesn't exist or is unborn
    return read_ref(repo, HEADS_PREFIX + branch_name)


def branch_exists(repo, branch_name):
    return os.path.isfile(repo.path('refs', 'heads', *branch_name.split('/')))


def get_all_branches(repo): # Lists all branch names by walking the refs/heads directory
    branches_dir = repo.path('refs', 'heads')
    if not os.path.isdir(branches_dir):
        return []
    branches = []
    for root, _, files in os.walk(branches_dir):
        for name in files:
            rel = os.path.relpath(os.path.join(root, name), branches_dir)
            branches.append(rel.replace(os.sep, '/'))
    return sorted(branches)


def update_ref(repo, ref, commit_hash):
    ref_path = repo.path(*ref.split('/'))
    os.makedirs(os.path.dirname(ref_path), exist_ok=True)
    with open(ref_path, 'w') as f:
        f.write(f"{commit_hash}\n")


def update_head(repo, commit_hash): # Advances the current branch, or HEAD itself when detached
    ref = get_head_ref(repo)
    if ref:
        update_ref(repo, ref, commit_hash)
    else:
        with open(repo.path('HEAD'), 'w') as f:
            f.write(f"{commit_hash}\n")
    return ref


def set_head_branch(repo, branch_name):
    with open(repo.path('HEAD'), 'w') as f:
        f.write(f"ref: {HEADS_PREFIX}{branch_name}\n")


def is_valid_branch_name(name):
    if not name:
        return False
    if name.startswith('-'):
        return False
    if name.startswith('.') or name.endswith('.'):
        return False
    if '..' in name:
        return False
    if _INVALID_BRANCH_CHARS.search(name):
        return False
    if name.endswith('.lock'):
        return False
    return True


def create_branch(repo, branch_name, commit_hash): # Creates a new branch pointing to the given commit hash
    if not is_valid_branch_name(branch_name):
        raise InvalidBranchNameError(branch_name)
    if branch_exists(repo, branch_name):
        raise BranchExistsError(branch_name)
    if not commit_hash:
        raise InvalidReferenceError("not a valid object name: 'HEAD'")
    update_ref(repo, HEADS_PREFIX + branch_name, commit_hash)


def resolve_commit(repo, name): # Turns a branch name, 'HEAD', a full hash or a unique prefix into a commit hash
    if name == 'HEAD':
        commit_hash = get_head_commit(repo)
        if commit_hash:
            return commit_hash
        raise InvalidReferenceError("not a valid object name: 'HEAD'")

    if branch_exists(repo, name):
        commit_hash = get_branch_commit(repo, name)
        if commit_hash:
            return commit_hash
        raise InvalidReferenceError(f"branch '{name}' does not have any commits yet")

    lowered = name.lower()
    if _HEX_RE.match(lowered):
        prefix_dir = repo.path('objects', lowered[:2])
        if os.path.isdir(prefix_dir):
            rest = lowered[2:]
            matches = [lowered[:2] + f for f in os.listdir(prefix_dir) if f.startswith(rest)]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise InvalidReferenceError(f"short object ID {name} is ambiguous")

    raise InvalidReferenceError(f"not a valid object name: '{name}'")


def get_head_status(repo): # Returns a user-friendly string describing HEAD state
    current_branch = get_current_branch(repo)
    if current_branch:
        return f"On branch {current_branch}"
    head_commit = get_head_commit(repo)
    if head_commit:
        return f"HEAD detached at {head_commit[:7]}"
    return "HEAD detached (no commits yet)"
