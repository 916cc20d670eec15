# The command: mgit add <file>...
# What it does: Takes a snapshot of files from the working directory and stages them for the next commit by updating the index
# How it does: It reads the index into an in-memory dictionary. For each file it computes the blob hash; unchanged files are skipped, changed files are written as blob objects and their entry is updated, and staged files that no longer exist are dropped. The dictionary is then written back, even if some files failed
# What data structure it uses: Hash Table / Dictionary (to manage the index in memory), List (to hold the list of files to add), and performs a Tree Traversal (when expanding `.` or a directory using os.walk)

import os
import sys

from utils import repository, objects, ignore, worktree, index as index_utils


class AddResult:
    def __init__(self):
        self.added = []
        self.unchanged = []
        self.removed = []
        self.errors = []

    @property
    def ok(self):
        return not self.errors


def expand_paths(repo, paths, index):
    """
    Expands '.' and directory arguments into repository-relative file paths.
    Staged files under an expanded directory that vanished are included so their removal is staged.
    Returns (paths, ignored); ignored holds explicitly named paths that match an ignore pattern and are not tracked.
    """
    ignore_patterns = ignore.get_ignored_patterns(repo)
    working_files = None
    expanded = []
    ignored = []

    for path in paths:
        path = path.strip('/') if path not in ('.', './') else ''
        if path == '..' or path.startswith('../'):
            expanded.append(path)
            continue
        full_path = repo.work_path(path) if path else repo.root
        if os.path.isdir(full_path):
            if working_files is None:
                working_files = ignore.list_working_files(repo, ignore_patterns)
            prefix = path + '/' if path else ''
            expanded.extend(f for f in working_files if f.startswith(prefix))
            expanded.extend(f for f in index if f.startswith(prefix) and not os.path.isfile(repo.work_path(f)))
        elif path and ignore.is_ignored(path, ignore_patterns) and path not in index:
            ignored.append(path)
        elif path:
            expanded.append(path)

    seen = set()
    return [p for p in expanded if not (p in seen or seen.add(p))], ignored


def add_paths(repo, paths):
    """Stage the given repository-relative paths and persist the index."""
    index = index_utils.read_index(repo)
    result = AddResult()

    rel_paths, ignored = expand_paths(repo, paths, index)
    for rel_path in ignored:
        result.errors.append((rel_path, "path is ignored by .mgitignore or info/exclude"))

    for rel_path in rel_paths:
        if rel_path == '..' or rel_path.startswith('../'):
            result.errors.append((rel_path, "path is outside the repository"))
            continue
        content = worktree.read_file(repo, rel_path)
        if content is None:
            if rel_path in index:
                del index[rel_path]
                result.removed.append(rel_path)
            else:
                result.errors.append((rel_path, f"pathspec '{rel_path}' did not match any files"))
            continue

        try:
            sha1 = objects.hash_object(repo, content, 'blob', write=False)
            if rel_path in index and index[rel_path].hash == sha1:
                result.unchanged.append(rel_path)
                continue
            objects.write_blob(repo, content)
            index[rel_path] = index_utils.stat_entry(repo, rel_path, sha1)
            result.added.append(rel_path)
        except OSError as e:
            result.errors.append((rel_path, str(e)))

    index_utils.write_index(repo, index)
    return result


def to_repo_path(repo, path): # Converts a path given relative to the current directory into a repository-relative one
    return os.path.relpath(os.path.abspath(path), repo.root).replace(os.sep, '/')


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    result = add_paths(repo, [to_repo_path(repo, f) for f in args.files])

    for rel_path in result.added:
        print(f"Added '{rel_path}' to the index.")
    for rel_path in result.removed:
        print(f"Removed '{rel_path}' from the index (deleted).")
    for rel_path, message in result.errors:
        print(f"error: {rel_path}: {message}", file=sys.stderr)

    if not result.ok:
        sys.exit(1)
