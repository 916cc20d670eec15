# One module per mgit subcommand; each exposes run(args) plus the plain function it wraps

from . import init, add, commit, log, status, config, branch, checkout, diff, merge
