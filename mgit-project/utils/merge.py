# What it does: The three-way comparison behind `mgit merge`: classifies every path, writes conflict markers and applies clean changes
# How it does: Each path is judged only by hash equality between the current side, the incoming side and the merge base; no line-level merging is attempted
# What data structure it uses: Dictionaries ({path: hash} snapshots) and a Set for the union of paths

import os
from collections import namedtuple

from . import objects, worktree

MODIFY_MODIFY = 'modify-modify'
ADD_ADD = 'add-add'
DELETE_MODIFY = 'delete-modify'
MODIFY_DELETE = 'modify-delete'

MERGE_HEAD = 'MERGE_HEAD'
MERGE_MSG = 'MERGE_MSG'

Conflict = namedtuple('Conflict', ['path', 'kind', 'current', 'incoming', 'base'])


class MergePlan:
    def __init__(self):
        self.conflicts = []
        self.added = []
        self.modified = []
        self.deleted = []
        self.writes = {}

    @property
    def has_conflicts(self):
        return bool(self.conflicts)

    @property
    def conflicted_paths(self):
        return [conflict.path for conflict in self.conflicts]


class MergeResult:
    """Outcome of merging one branch into the current one.

    ``status`` is one of: same-branch, up-to-date, fast-forward, merged, conflict.
    """

    def __init__(self, status, commit=None, base=None, conflicts=None,
                 added=None, modified=None, deleted=None):
        self.status = status
        self.commit = commit
        self.base = base
        self.conflicts = conflicts or []
        self.added = added or []
        self.modified = modified or []
        self.deleted = deleted or []

    @property
    def ok(self):
        return self.status != 'conflict'

    def __bool__(self):
        return self.ok

    def __repr__(self):
        return f"MergeResult(status={self.status!r}, commit={self.commit!r}, conflicts={len(self.conflicts)})"


def classify_path(current, incoming, base):
    """Classify one path from its three hashes (None means absent).

    Returns (conflict_kind, action) where action is 'add', 'modify', 'delete' or None.
    """
    if current and incoming and current != incoming:
        if base is None:
            return ADD_ADD, None
        if current != base and incoming != base:
            return MODIFY_MODIFY, None
    if current is None and incoming and base and incoming != base:
        return DELETE_MODIFY, None
    if current and incoming is None and base and current != base:
        return MODIFY_DELETE, None

    if incoming and base is None and current is None:
        return None, 'add'
    if incoming and base and incoming != base and current == base:
        return None, 'modify'
    if incoming is None and base and current == base:
        return None, 'delete'
    return None, None


def classify_changes(current_tree, incoming_tree, base_tree):
    """Compare the current and incoming {path: hash} snapshots against their base."""
    plan = MergePlan()
    for path in sorted(set(current_tree) | set(incoming_tree)):
        current = current_tree.get(path)
        incoming = incoming_tree.get(path)
        base = base_tree.get(path)

        kind, action = classify_path(current, incoming, base)
        if kind:
            plan.conflicts.append(Conflict(path, kind, current, incoming, base))
        elif action == 'add':
            plan.added.append(path)
            plan.writes[path] = incoming
        elif action == 'modify':
            plan.modified.append(path)
            plan.writes[path] = incoming
        elif action == 'delete':
            plan.deleted.append(path)
    return plan


def _with_newline(content):
    if content and not content.endswith(b'\n'):
        return content + b'\n'
    return content


def conflict_text(current_content, incoming_content):
    current_content = _with_newline(current_content or b'')
    incoming_content = _with_newline(incoming_content or b'')
    return (b'<<<<<<< HEAD\n' + current_content + b'=======\n'
            + incoming_content + b'>>>>>>> incoming\n')


def write_conflict_file(repo, conflict):
    current_content = objects.read_blob(repo, conflict.current) if conflict.current else b''
    incoming_content = objects.read_blob(repo, conflict.incoming) if conflict.incoming else b''
    worktree.write_file(repo, conflict.path, conflict_text(current_content, incoming_content))


def apply_plan(repo, plan): # Writes clean additions/modifications and removes clean deletions from the working tree
    for path, sha1 in sorted(plan.writes.items()):
        if not worktree.checkout_blob(repo, path, sha1):
            raise FileNotFoundError(f"object {sha1} for '{path}' is missing")
    for path in plan.deleted:
        worktree.remove_file(repo, path)


def merge_message(branch_name, current_branch, conflicted_paths=None):
    message = f"Merge branch '{branch_name}' into {current_branch}"
    if conflicted_paths:
        message += "\n\nConflicts:\n" + "\n".join(f"\t{path}" for path in conflicted_paths) + "\n"
    return message


def write_merge_state(repo, incoming_hash, message):
    with open(repo.path(MERGE_HEAD), 'w') as f:
        f.write(f"{incoming_hash}\n")
    with open(repo.path(MERGE_MSG), 'w') as f:
        f.write(message)


def read_merge_head(repo): # Returns the incoming commit of an unfinished merge, or None
    path = repo.path(MERGE_HEAD)
    if not os.path.isfile(path):
        return None
    with open(path, 'r') as f:
        return f.read().strip() or None


def read_merge_message(repo):
    path = repo.path(MERGE_MSG)
    if not os.path.isfile(path):
        return None
    with open(path, 'r') as f:
        return f.read()


def clear_merge_state(repo):
    for name in (MERGE_HEAD, MERGE_MSG):
        path = repo.path(name)
        if os.path.isfile(path):
            os.remove(path)
