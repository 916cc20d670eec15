# The command: mgit branch [<branch-name>]
# What it does: Creates a new branch pointer to the current commit, or if no name is given, it lists all existing branches
# How it does: To create a branch, it validates the name, gets the current HEAD commit hash and writes it to a new file named `<branch-name>` inside `refs/heads`
# To list branches, it reads all the filenames in that directory and prints them, marking the current one with an asterisk
# What data structure it uses: Map / Dictionary (conceptually, the `refs/heads` directory maps branch names to commit hashes), List (to hold branch names for sorting and display)

from utils import repository
from utils.errors import DetachedHeadError


def create(repo, name):
    if repository.get_current_branch(repo) is None:
        raise DetachedHeadError("create a branch")
    head_commit_hash = repository.get_head_commit(repo)
    repository.create_branch(repo, name, head_commit_hash)
    return head_commit_hash


def list_branches(repo): # Returns [(name, is_current)] sorted by name
    current_branch = repository.get_current_branch(repo)
    return [(name, name == current_branch) for name in repository.get_all_branches(repo)]


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)

    if args.name:
        head_commit_hash = create(repo, args.name)
        print(f"Branch '{args.name}' created at commit {head_commit_hash[:7]}")
        return

    branches = list_branches(repo)
    if not branches:
        print("No branches yet")
    for name, is_current in branches:
        print(f"* {name}" if is_current else f"  {name}")
