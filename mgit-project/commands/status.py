# The command: mgit status
# What it does: Provides a summary of the repository state by comparing the HEAD commit, the index (staging area), and the working directory
# How it does: It generates three dictionaries of {path: hash} for the three states. It then compares these dictionaries to find staged changes (HEAD vs. index), unstaged changes (index vs. workdir), and untracked files (files in workdir but not in index)
# What data structure it uses: Hash Table / Dictionary (to represent the three states for efficient O(1) average time complexity lookups), Sets (for efficient comparison of file lists to find additions/deletions in O(N) time)

from utils import repository, commits, tree, worktree, merge as merge_utils, diff as diff_utils, index as index_utils


class Status:
    def __init__(self, head_status, staged, unstaged, untracked, merge_head=None):
        self.head_status = head_status
        self.staged = staged
        self.unstaged = unstaged
        self.untracked = untracked
        self.merge_head = merge_head

    @property
    def clean(self):
        return not (any(self.staged.values()) or any(self.unstaged.values()) or self.untracked)


def get_status(repo): # Compares the HEAD, index, and working directory states
    head_commit = repository.get_head_commit(repo)
    head_files = tree.read_tree_hashes(repo, commits.get_commit_tree_hash(repo, head_commit)) if head_commit else {}
    index_files = index_utils.read_index_hashes(repo)
    working_files = worktree.working_state(repo)

    staged = _compare_dicts(head_files, index_files)

    # Only tracked files can have unstaged changes
    tracked_working = {path: sha1 for path, sha1 in working_files.items() if path in index_files}
    unstaged = _compare_dicts(index_files, tracked_working)
    unstaged = {'modified': unstaged['modified'], 'deleted': unstaged['deleted']}

    untracked = sorted(set(working_files) - set(index_files))

    return Status(repository.get_head_status(repo), staged, unstaged, untracked,
                  merge_utils.read_merge_head(repo))


def _compare_dicts(d1, d2): # Compares two {path: hash} dictionaries and returns a dict of changes
    changes = diff_utils.compare_states(d1, d2)
    return {'new file': changes['added'], 'modified': changes['modified'], 'deleted': changes['deleted']}


def _print_status(header, changes, hint=None):
    if not any(changes.values()):
        return
    print(f"\n{header}:")
    if hint:
        print(f"  ({hint})")
    for change_type, paths in changes.items():
        for path in paths:
            print(f"\t{change_type + ':':<11} {path}")


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)
    status = get_status(repo)

    print(status.head_status)
    if status.merge_head:
        print("\nYou have unmerged paths.")
        print("  (fix conflicts and run \"mgit commit\")")

    _print_status("Changes to be committed", status.staged)
    _print_status("Changes not staged for commit", status.unstaged,
                  "use \"mgit add <file>...\" to update what will be committed")

    if status.untracked:
        print("\nUntracked files:")
        print("  (use \"mgit add <file>...\" to include in what will be committed)")
        for path in status.untracked:
            print(f"\t{path}")

    if status.clean:
        print("nothing to commit, working tree clean")
