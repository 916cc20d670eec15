import argparse
import logging
import sys

from commands import init, add, commit, log, status, config, branch, checkout, diff, merge
from utils.errors import MgitError
from utils.repository import DEFAULT_META_DIR


def build_parser():
    parser = argparse.ArgumentParser(prog="mgit", description="mgit: a content-addressed version control tool.")
    parser.add_argument("--meta-dir", default=DEFAULT_META_DIR,
                        help=f"Name of the repository metadata directory (default: {DEFAULT_META_DIR}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug diagnostics.")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    # mgit init
    init_parser = subparsers.add_parser("init", help="Create an empty repository in the current directory.")
    init_parser.set_defaults(func=init.run)

    # mgit add <path>...
    add_parser = subparsers.add_parser("add", help="Stage files, directories or '.' for the next commit.")
    add_parser.add_argument("files", nargs="+", metavar="path", help="Paths to stage.")
    add_parser.set_defaults(func=add.run)

    # mgit commit -m <message>
    commit_parser = subparsers.add_parser("commit", help="Record the staged snapshot as a new commit.")
    commit_parser.add_argument("-m", "--message", default="",
                               help="Commit message (defaults to the merge message when concluding a merge).")
    commit_parser.set_defaults(func=commit.run)

    # mgit log
    log_parser = subparsers.add_parser("log", help="Walk the history reachable from HEAD.")
    log_parser.set_defaults(func=log.run)

    # mgit status
    status_parser = subparsers.add_parser("status", help="Compare HEAD, the index and the working tree.")
    status_parser.set_defaults(func=status.run)

    # mgit config <section.key> <value>
    config_parser = subparsers.add_parser("config", help="Set a repository configuration value.")
    config_parser.add_argument("key", help="Dotted key such as user.name or user.email.")
    config_parser.add_argument("value", help="Value to store.")
    config_parser.set_defaults(func=config.run)

    # mgit branch [<name>]
    branch_parser = subparsers.add_parser("branch", help="List branches, or create one at HEAD.")
    branch_parser.add_argument("name", nargs="?", help="Branch to create.")
    branch_parser.set_defaults(func=branch.run)

    # mgit checkout [-b] <branch>
    checkout_parser = subparsers.add_parser("checkout", help="Switch to a branch, updating tracked files.")
    checkout_parser.add_argument("-b", dest="create_new", action="store_true",
                                 help="Create the branch at HEAD before switching to it.")
    checkout_parser.add_argument("branch_name", metavar="branch", help="Branch to switch to.")
    checkout_parser.set_defaults(func=checkout.run)

    # mgit diff [--staged] [<commit> [<commit>]]
    diff_parser = subparsers.add_parser("diff", help="Show line changes between commits, the index and the working tree.")
    diff_parser.add_argument("--staged", action="store_true", help="Compare the index with HEAD.")
    diff_parser.add_argument("commits", nargs="*", help="Zero, one or two commits to compare.")
    diff_parser.set_defaults(func=diff.run)

    # mgit merge <branch>
    merge_parser = subparsers.add_parser("merge", help="Join another branch's history into the current branch.")
    merge_parser.add_argument("branch", help="Branch whose tip is merged in.")
    merge_parser.set_defaults(func=merge.run)

    return parser


# The main entry point for the mgit version control system
def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    if len(getattr(args, "commits", [])) > 2:
        parser.error("diff takes at most two commits")

    try:
        args.func(args)
    except (MgitError, OSError) as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
