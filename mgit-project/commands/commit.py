# The command: mgit commit -m "<message>"
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes.
# How it does: It builds a hierarchical Merkle Tree from the flat index to get a single root hash for the project's state. It then finds the parent commit, gathers metadata (author, message), and stores them as a "commit" object. Finally, it moves the current branch (or a detached HEAD) to the new commit. A pending MERGE_HEAD becomes the second parent, which is how a conflicted merge is concluded.
# What data structure it uses: Merkle Tree (to represent the project's file structure), Directed Acyclic Graph (DAG) (as each commit links to its parents, forming the history graph), Hash Table / Dictionary (the underlying object store)

import sys

from utils import repository, commits, tree, merge as merge_utils, index as index_utils
from utils.errors import NothingToCommitError


def create_commit(repo, message, parents=None):
    """Commit the index and advance HEAD; returns the new commit hash.

    ``parents`` defaults to the HEAD commit plus MERGE_HEAD when a merge is
    being concluded.
    """
    index = index_utils.read_index_hashes(repo)
    if not index:
        raise NothingToCommitError("nothing to commit (use \"mgit add\" to stage files)")

    merge_head = merge_utils.read_merge_head(repo)
    if parents is None:
        parent_commit = commits.get_parent_commit(repo)
        parents = [parent_commit] if parent_commit else []
        if merge_head:
            parents.append(merge_head)

    tree_hash = tree.build_tree(repo, index)

    if len(parents) == 1 and commits.get_commit_tree_hash(repo, parents[0]) == tree_hash:
        raise NothingToCommitError("nothing to commit, working tree clean")

    if not message or not message.strip():
        merge_message = merge_utils.read_merge_message(repo) if merge_head else None
        if not merge_message:
            raise NothingToCommitError("aborting commit due to empty commit message")
        message = merge_message.splitlines()[0]

    commit_hash = commits.write_commit(repo, tree_hash, parents, message)
    repository.update_head(repo, commit_hash)
    if merge_head:
        merge_utils.clear_merge_state(repo)

    return commit_hash


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    commit_hash = create_commit(repo, args.message)

    current_branch = repository.get_current_branch(repo) or 'detached HEAD'
    message = commits.read_commit(repo, commit_hash).message
    summary = message.splitlines()[0] if message else ''
    print(f"[{current_branch} {commit_hash[:7]}] {summary}")
