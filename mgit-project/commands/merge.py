# The command: mgit merge <branch-name>
# What it does: Merges another branch into the current one, by fast-forward when possible and by a three-way merge otherwise
# How it does: If the current tip is an ancestor of the incoming tip the branch pointer is simply moved and the working tree updated. Otherwise it finds the merge base, classifies every file by comparing hashes on both sides against the base, applies and stages the clean changes, and either writes conflict markers (leaving MERGE_HEAD for a manual commit) or records a commit with both tips as parents. A pending MERGE_HEAD blocks any new merge
# What data structure it uses: DAG (for finding common ancestor), Merkle Trees (for content comparison)

import logging
import sys

from utils import repository, commits, tree, graph, worktree, merge as merge_utils, index as index_utils
from utils.errors import DetachedHeadError, InvalidReferenceError, MergeInProgressError, UnrelatedHistoriesError
from utils.merge import MergeResult
from commands import checkout as checkout_command

logger = logging.getLogger(__name__)


def _commit_files(repo, commit_hash):
    return tree.read_tree_hashes(repo, commits.get_commit_tree_hash(repo, commit_hash))


def _fast_forward(repo, head_ref, current_hash, incoming_hash):
    repository.update_ref(repo, head_ref, incoming_hash)

    old_files = _commit_files(repo, current_hash)
    new_files = _commit_files(repo, incoming_hash)
    checkout_command.switch_tree(repo, old_files, new_files)
    diff = merge_utils.classify_changes(old_files, new_files, old_files)
    return MergeResult('fast-forward', commit=incoming_hash, base=current_hash,
                       added=diff.added, modified=diff.modified, deleted=diff.deleted)


def _restage(repo, paths):
    """Rehash every path that is still on disk into the index; vanished paths are dropped."""
    index = index_utils.read_index(repo)
    for path in sorted(paths):
        if worktree.read_file(repo, path) is None:
            index.pop(path, None)
        else:
            index[path] = index_utils.stage_file(repo, path)
    index_utils.write_index(repo, index)
    return index


def merge(repo, branch_name):
    """Merge ``branch_name`` into the current branch and return a MergeResult."""
    pending = merge_utils.read_merge_head(repo)
    if pending:
        raise MergeInProgressError(pending)

    head_ref = repository.get_head_ref(repo)
    current_branch = repository.get_current_branch(repo)
    if head_ref is None or current_branch is None:
        raise DetachedHeadError("merge")

    if branch_name == current_branch:
        return MergeResult('same-branch')

    if not repository.branch_exists(repo, branch_name):
        raise InvalidReferenceError(f"branch '{branch_name}' does not exist")

    current_hash = repository.get_head_commit(repo)
    incoming_hash = repository.get_branch_commit(repo, branch_name)
    if not current_hash:
        raise InvalidReferenceError(f"current branch '{current_branch}' has no commits")
    if not incoming_hash:
        raise InvalidReferenceError(f"branch '{branch_name}' has no commits")

    if current_hash == incoming_hash or graph.is_fast_forward(repo, incoming_hash, current_hash):
        return MergeResult('up-to-date', commit=current_hash, base=incoming_hash)

    if graph.is_fast_forward(repo, current_hash, incoming_hash):
        logger.debug("fast-forwarding %s to %s", head_ref, incoming_hash)
        return _fast_forward(repo, head_ref, current_hash, incoming_hash)

    base_hash = graph.find_common_ancestor(repo, current_hash, incoming_hash)
    if base_hash is None:
        raise UnrelatedHistoriesError(current_hash, incoming_hash)
    logger.debug("merge base of %s and %s is %s", current_hash, incoming_hash, base_hash)

    current_files = _commit_files(repo, current_hash)
    incoming_files = _commit_files(repo, incoming_hash)
    base_files = _commit_files(repo, base_hash)

    plan = merge_utils.classify_changes(current_files, incoming_files, base_files)

    if plan.has_conflicts:
        # Clean paths go to the working tree and index first; conflicted ones get markers
        merge_utils.apply_plan(repo, plan)
        _restage(repo, set(plan.writes) | set(plan.deleted))
        for conflict in plan.conflicts:
            merge_utils.write_conflict_file(repo, conflict)
        message = merge_utils.merge_message(branch_name, current_branch, plan.conflicted_paths)
        merge_utils.write_merge_state(repo, incoming_hash, message)
        return MergeResult('conflict', base=base_hash, conflicts=plan.conflicts,
                           added=plan.added, modified=plan.modified, deleted=plan.deleted)

    merge_utils.apply_plan(repo, plan)
    index = _restage(repo, set(current_files) | set(incoming_files))

    tree_hash = tree.build_tree(repo, {path: entry.hash for path, entry in index.items()})
    message = merge_utils.merge_message(branch_name, current_branch)
    merge_commit = commits.write_commit(repo, tree_hash, [current_hash, incoming_hash], message)
    repository.update_ref(repo, head_ref, merge_commit)

    return MergeResult('merged', commit=merge_commit, base=base_hash,
                       added=plan.added, modified=plan.modified, deleted=plan.deleted)


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    current_branch = repository.get_current_branch(repo)
    result = merge(repo, args.branch)

    if result.status == 'same-branch':
        print(f"Already on '{args.branch}'")
        return
    if result.status == 'up-to-date':
        print("Already up to date.")
        return

    print(f"Merging '{args.branch}' into '{current_branch}'")
    if result.status == 'fast-forward':
        print(f"Updating {result.base[:7]}..{result.commit[:7]}")
        print("Fast-forward")
        _print_changes(result)
        return

    print(f"Found common ancestor: {result.base[:7]}")
    if result.status == 'conflict':
        for conflict in result.conflicts:
            print(f"CONFLICT ({conflict.kind}): Merge conflict in {conflict.path}")
        print("Automatic merge failed; fix conflicts and then commit the result.")
        sys.exit(1)

    _print_changes(result)
    print("Merge made by the 'three-way' strategy.")
    print(f"{result.commit[:7]} Merge branch '{args.branch}' into {current_branch}")


def _print_changes(result):
    for path in result.added:
        print(f" create {path}")
    for path in result.modified:
        print(f" update {path}")
    for path in result.deleted:
        print(f" delete {path}")
