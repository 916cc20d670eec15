# The command: mgit diff [--staged] [<commit> [<commit>]]
# What it does: Shows line-by-line changes between repository states: working directory vs. index (default), index vs. HEAD (--staged), working directory vs. a commit, or one commit vs. another
# How it does: It gathers two dictionaries of {path: hash} for the "before" and "after" states, skips paths whose hashes agree, fetches both versions of the rest and renders them with the Myers-based unified diff formatter
# What data structure it uses: Hash Table / Dictionary (to represent the file states for quick lookups), Sets (for the union of paths), List / Array (of file lines passed to the diffing algorithm)

from utils import repository, commits, objects, tree, worktree, diff as diff_utils, index as index_utils
from utils.errors import MgitError


def _commit_files(repo, commit_hash):
    return tree.read_tree_hashes(repo, commits.get_commit_tree_hash(repo, commit_hash))


def _working_files(repo, paths):
    files = {}
    for path in paths:
        sha1 = worktree.hash_working_file(repo, path)
        if sha1 is not None:
            files[path] = sha1
    return files


def diff_states(repo, old_files, new_files, new_from_worktree=False, context=3):
    """Return one unified diff block per path that differs between two {path: hash} states."""
    blocks = []
    for path in sorted(set(old_files) | set(new_files)):
        old_hash = old_files.get(path)
        new_hash = new_files.get(path)
        if old_hash == new_hash:
            continue

        old_content = objects.read_blob(repo, old_hash) if old_hash else None
        if new_hash is None:
            new_content = None
        elif new_from_worktree:
            new_content = worktree.read_file(repo, path)
        else:
            new_content = objects.read_blob(repo, new_hash)

        block = diff_utils.format_unified_diff(
            old_content or b'', new_content or b'', path, context,
            old_missing=old_hash is None, new_missing=new_hash is None,
        )
        if block:
            blocks.append(block)
    return blocks


def diff(repo, staged=False, commits_to_compare=None):
    commits_to_compare = commits_to_compare or []
    if len(commits_to_compare) > 2:
        raise MgitError("diff takes at most two commits")

    if staged:
        # Index vs HEAD; with no commits everything staged shows up as new
        head_commit = repository.get_head_commit(repo)
        old_files = _commit_files(repo, head_commit) if head_commit else {}
        return diff_states(repo, old_files, index_utils.read_index_hashes(repo))

    if len(commits_to_compare) == 2:
        old_hash = repository.resolve_commit(repo, commits_to_compare[0])
        new_hash = repository.resolve_commit(repo, commits_to_compare[1])
        return diff_states(repo, _commit_files(repo, old_hash), _commit_files(repo, new_hash))

    if len(commits_to_compare) == 1:
        commit_hash = repository.resolve_commit(repo, commits_to_compare[0])
        old_files = _commit_files(repo, commit_hash)
        paths = set(old_files) | set(index_utils.read_index_hashes(repo))
        return diff_states(repo, old_files, _working_files(repo, paths), new_from_worktree=True)

    index_files = index_utils.read_index_hashes(repo)
    return diff_states(repo, index_files, _working_files(repo, index_files), new_from_worktree=True)


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    blocks = diff(repo, staged=args.staged, commits_to_compare=args.commits)
    for block in blocks:
        print(block)
        print()
