# What it does: Walks the commit graph to enumerate ancestors, find merge bases and detect fast-forwards
# How it does: Breadth-first search over parent links (both parents of merge commits), with a visited set so shared history is expanded once. The merge base is the common ancestor with the smallest combined distance from both tips
# What data structure it uses: Directed Acyclic Graph (DAG) traversed with a Queue (collections.deque) and a Set for visited commits

from collections import deque

from . import commits


def _parents(repo, commit_hash):
    commit = commits.read_commit(repo, commit_hash)
    if commit is None:
        return []
    return commit.parents


def get_ancestors(repo, commit_hash): # Returns commit_hash and all of its ancestors in BFS discovery order
    ancestors = []
    visited = {commit_hash}
    queue = deque([commit_hash])

    while queue:
        current = queue.popleft()
        ancestors.append(current)
        for parent in _parents(repo, current):
            if parent not in visited:
                visited.add(parent)
                queue.append(parent)

    return ancestors


def get_ancestors_with_distance(repo, commit_hash): # Returns {hash: shortest edge distance from commit_hash}
    distances = {commit_hash: 0}
    queue = deque([commit_hash])

    while queue:
        current = queue.popleft()
        for parent in _parents(repo, current):
            if parent not in distances:
                distances[parent] = distances[current] + 1
                queue.append(parent)

    return distances


def find_common_ancestor(repo, commit1, commit2):
    """Return the merge base of two commits, or None for unrelated histories.

    Among the common ancestors the one with the lowest total distance wins.
    Ties go to the candidate closer to ``commit1``, then to the smaller hash.
    """
    ancestors1 = get_ancestors_with_distance(repo, commit1)
    ancestors2 = get_ancestors_with_distance(repo, commit2)

    candidates = [
        (dist1 + ancestors2[sha1], dist1, sha1)
        for sha1, dist1 in ancestors1.items()
        if sha1 in ancestors2
    ]
    if not candidates:
        return None
    return min(candidates)[2]


def is_fast_forward(repo, current, incoming): # True if current is incoming or one of its ancestors
    if current == incoming:
        return True
    return current in set(get_ancestors(repo, incoming))


def iter_history(repo, commit_hash):
    """Yield ``(hash, Commit)`` for commit_hash and its ancestors, starting at the tip.

    Breadth-first from commit_hash, first parents queued before second parents,
    so commits from a merged branch come before their shared history. An
    unreadable commit is yielded as ``(hash, None)`` and ends the walk.
    """
    visited = {commit_hash}
    queue = deque([commit_hash])
    while queue:
        current = queue.popleft()

        commit = commits.read_commit(repo, current)
        yield current, commit
        if commit is None:
            return

        for parent in commit.parents:
            if parent not in visited:
                visited.add(parent)
                queue.append(parent)
