# The command: mgit log
# What it does: Displays the commit history by starting at the current HEAD and walking backward through the parent links
# How it does: It walks the history breadth-first from HEAD (first parents queued before second parents, each commit once), printing each commit's hash, merge parents, author, date and message. An unreadable commit is reported and ends the walk
# What data structure it uses: It performs a Graph Traversal (breadth-first, first parent first) on the Directed Acyclic Graph (DAG) formed by the commits

import sys

from utils import repository, commits, graph


def format_date(identity):
    date = commits.identity_date(identity)
    if date is None:
        return None
    return date.strftime('%a %b %d %H:%M:%S %Y ') + identity.timezone


def format_commit(commit_hash, commit): # Renders one commit the way `git log` does
    lines = [f"commit {commit_hash}"]
    if commit.is_merge:
        lines.append("Merge: " + " ".join(parent[:7] for parent in commit.parents))
    if commit.author:
        author = commit.author
        lines.append(f"Author: {author.name} <{author.email}>" if author.email else f"Author: {author.name}")
        date = format_date(author)
        if date:
            lines.append(f"Date:   {date}")
    lines.append("")
    lines.extend("    " + line for line in commit.message.split("\n"))
    lines.append("")
    return "\n".join(lines)


def run(args):
    repo = repository.find_repo(meta_dir=args.meta_dir)

    commit_hash = repository.get_head_commit(repo)
    if not commit_hash: # Check if there are any commits
        current_branch = repository.get_current_branch(repo) or repository.DEFAULT_BRANCH
        print(f"fatal: your current branch '{current_branch}' does not have any commits yet", file=sys.stderr)
        sys.exit(1)

    for current_hash, commit in graph.iter_history(repo, commit_hash):
        if commit is None:
            print(f"error: could not read commit {current_hash}", file=sys.stderr)
            sys.exit(1)
        print(format_commit(current_hash, commit))
