# The command: mgit checkout [-b] <branch-name>
# What it does: Switches branches, optionally creating the branch first.
# How it does:
#   - With -b: creates the branch at the current commit and points HEAD at it; files are untouched since both branches share a commit.
#   - Otherwise: validates the branch exists, replaces the tracked files of the old HEAD tree with those of the branch tip, rebuilds the index from that tree and overwrites HEAD with a symbolic ref.
# Local changes to a file that differs between the two trees stop the switch before anything is written.
# What data structure it uses: Dictionary ({path: hash} trees of both commits), Set (paths to remove), Hash Table (object store lookup).

from utils import repository, commits, tree, worktree, index as index_utils
from utils.errors import InvalidReferenceError, MgitError
from commands import branch as branch_command


class CheckoutResult:
    def __init__(self, branch, status, written=None, removed=None):
        self.branch = branch
        self.status = status  # "already-on", "created", "switched"
        self.written = written or []
        self.removed = removed or []


def _commit_files(repo, commit_hash):
    if not commit_hash:
        return {}
    return tree.read_tree_hashes(repo, commits.get_commit_tree_hash(repo, commit_hash))


def _local_changes(repo, head_files):
    """Paths whose index entry or working copy differs from the HEAD tree."""
    index_files = index_utils.read_index_hashes(repo)
    changed = {path for path in set(head_files) | set(index_files)
               if head_files.get(path) != index_files.get(path)}
    for path, sha1 in index_files.items():
        if worktree.hash_working_file(repo, path) != sha1:
            changed.add(path)
    return changed


def switch_tree(repo, old_files, new_files): # Rewrites tracked working files from old_files to new_files and restages the index
    removed = []
    for path in sorted(set(old_files) - set(new_files)):
        if worktree.remove_file(repo, path):
            removed.append(path)

    written = []
    for path, sha1 in sorted(new_files.items()):
        if old_files.get(path) == sha1 and worktree.hash_working_file(repo, path) == sha1:
            continue
        if not worktree.checkout_blob(repo, path, sha1):
            raise MgitError(f"object {sha1} for '{path}' is missing")
        written.append(path)

    index_utils.write_index(repo, index_utils.index_from_tree(repo, new_files))
    return written, removed


def checkout(repo, branch_name, create_new=False):
    if create_new:
        branch_command.create(repo, branch_name)
        repository.set_head_branch(repo, branch_name)
        return CheckoutResult(branch_name, 'created')

    if not repository.branch_exists(repo, branch_name):
        raise InvalidReferenceError(f"pathspec '{branch_name}' did not match any file(s) known to mgit")

    if repository.get_current_branch(repo) == branch_name:
        return CheckoutResult(branch_name, 'already-on')

    head_commit = repository.get_head_commit(repo)
    target_commit = repository.get_branch_commit(repo, branch_name)
    written, removed = [], []

    if target_commit and target_commit != head_commit:
        old_files = _commit_files(repo, head_commit)
        new_files = _commit_files(repo, target_commit)
        touched = {path for path in set(old_files) | set(new_files)
                   if old_files.get(path) != new_files.get(path)}
        blocked = sorted(touched & _local_changes(repo, old_files))
        if blocked:
            raise MgitError(
                "your local changes to the following files would be overwritten by checkout:\n\t"
                + "\n\t".join(blocked)
            )
        written, removed = switch_tree(repo, old_files, new_files)

    repository.set_head_branch(repo, branch_name)
    return CheckoutResult(branch_name, 'switched', written, removed)


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    result = checkout(repo, args.branch_name, args.create_new)

    if result.status == 'already-on':
        print(f"Already on '{result.branch}'")
    elif result.status == 'created':
        print(f"Switched to a new branch '{result.branch}'")
    else:
        print(f"Switched to branch '{result.branch}'")
