# What it does: Serializes commit metadata into commit objects and parses them back
# How it does: A commit body is plain text: `tree`, one `parent` line per parent, `author` and `committer` lines, a blank line, then the message. Parsing matches those prefixes line by line and switches to message mode at the first blank line
# What data structure it uses: Directed Acyclic Graph (DAG) (each commit links to its parents, forming the history graph)

import re
import time
from collections import namedtuple
from datetime import datetime, timedelta, timezone as dt_timezone

from . import objects, repository, config

IDENTITY_RE = re.compile(r'^(.+) <(.+)> (\d+) ([+-]\d{4})$')

Identity = namedtuple('Identity', ['name', 'email', 'timestamp', 'timezone'])


def format_identity(identity):
    return f"{identity.name} <{identity.email}> {identity.timestamp} {identity.timezone}"


def parse_identity(line):
    """Parse ``Name <email> <unixTimestamp> ±HHMM``.

    Lines that do not match keep the whole text as the name, with no date.
    """
    match = IDENTITY_RE.match(line)
    if not match:
        return Identity(line, '', None, None)
    name, email, timestamp, tz = match.groups()
    return Identity(name, email, int(timestamp), tz)


def identity_date(identity): # Returns an aware datetime for the identity, or None when the line had no date
    if identity is None or identity.timestamp is None:
        return None
    sign = -1 if identity.timezone.startswith('-') else 1
    offset = timedelta(hours=int(identity.timezone[1:3]), minutes=int(identity.timezone[3:5]))
    return datetime.fromtimestamp(identity.timestamp, dt_timezone(sign * offset))


def local_timezone(timestamp):
    offset = time.localtime(timestamp).tm_gmtoff
    sign = '-' if offset < 0 else '+'
    offset = abs(offset)
    return f"{sign}{offset // 3600:02d}{(offset % 3600) // 60:02d}"


def make_identity(repo, timestamp=None):
    name, email = config.get_identity(repo)
    if timestamp is None:
        timestamp = int(time.time())
    return Identity(name, email, timestamp, local_timezone(timestamp))


class Commit:
    def __init__(self, tree=None, parents=None, author=None, committer=None, message=''):
        self.tree = tree
        self.parents = list(parents or [])
        self.author = author
        self.committer = committer
        self.message = message

    @property
    def parent(self):
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self):
        return len(self.parents) > 1

    def __eq__(self, other):
        if not isinstance(other, Commit):
            return NotImplemented
        return (self.tree, self.parents, self.author, self.committer, self.message) == \
            (other.tree, other.parents, other.author, other.committer, other.message)

    def __repr__(self):
        return f"Commit(tree={self.tree!r}, parents={self.parents!r}, message={self.message!r})"


def serialize_commit(tree, parents, author, committer, message):
    lines = [f'tree {tree}']
    for parent in parents:
        if parent:
            lines.append(f'parent {parent}')
    lines.append(f'author {format_identity(author)}')
    lines.append(f'committer {format_identity(committer)}')
    lines.append('')
    lines.append(message)
    return ('\n'.join(lines) + '\n').encode()


def parse_commit(payload):
    if isinstance(payload, bytes):
        payload = payload.decode(errors='replace')

    commit = Commit()
    message_lines = []
    message_started = False

    for line in payload.split('\n'):
        if message_started:
            message_lines.append(line)
        elif line.startswith('tree '):
            commit.tree = line[5:].strip()
        elif line.startswith('parent '):
            commit.parents.append(line[7:].strip())
        elif line.startswith('author '):
            commit.author = parse_identity(line[7:])
        elif line.startswith('committer '):
            commit.committer = parse_identity(line[10:])
        elif line == '':
            message_started = True

    commit.message = '\n'.join(message_lines).strip()
    return commit


def write_commit(repo, tree, parents, message, author=None): # Creates a commit object and returns its hash; refs are left alone
    if author is None:
        author = make_identity(repo)
    payload = serialize_commit(tree, parents, author, author, message)
    return objects.write_commit_object(repo, payload)


def read_commit(repo, commit_hash): # Returns the parsed Commit, or None if the object is missing, corrupt or not a commit
    obj = objects.read_object(repo, commit_hash)
    if obj is None:
        return None
    obj_type, payload = obj
    if obj_type != 'commit':
        return None
    return parse_commit(payload)


def get_parent_commit(repo): # Resolves HEAD to the commit the next commit will build on, or None when unborn
    return repository.get_head_commit(repo)


def get_commit_tree_hash(repo, commit_hash): # Retrieves the tree hash from a commit object
    if not commit_hash:
        return None
    commit = read_commit(repo, commit_hash)
    return commit.tree if commit else None
