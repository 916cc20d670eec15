# What it does: Converts between the flat {path: hash} view of a snapshot and nested tree objects
# How it does: Paths are grouped into a nested dictionary, one tree object is written per directory level (children first), and reading walks the binary entries recursively, inlining subtrees with a `name/` prefix
# What data structure it uses: Merkle Tree (every directory hash covers the hashes of everything below it), built and read with recursion

import binascii
import logging
from collections import namedtuple

from . import objects
from .errors import CorruptObjectError, MgitError

logger = logging.getLogger(__name__)

FILE_MODE = '100644'
DIR_MODE = '040000'

TreeEntry = namedtuple('TreeEntry', ['mode', 'hash'])
RawEntry = namedtuple('RawEntry', ['mode', 'name', 'hash'])


def _sort_key(item):
    # Directories sort as if their name ended with '/', like git
    name, (mode, _) = item
    return name + '/' if mode == DIR_MODE else name


def encode_tree(entries): # Serializes {name: (mode, hex_hash)} into the binary tree format
    chunks = []
    for name, (mode, sha1) in sorted(entries.items(), key=_sort_key):
        if mode not in (FILE_MODE, DIR_MODE):
            raise ValueError(f"unsupported mode {mode} for {name}")
        if not name or '/' in name or '\0' in name:
            raise ValueError(f"invalid tree entry name: {name!r}")
        chunks.append(f"{mode} {name}\0".encode() + binascii.unhexlify(sha1))
    return b''.join(chunks)


def decode_tree(payload): # Parses one level of a tree object into a list of RawEntry
    entries = []
    offset = 0
    while offset < len(payload):
        space_index = payload.find(b' ', offset)
        if space_index < 0:
            raise CorruptObjectError("tree entry without mode terminator")
        null_index = payload.find(b'\0', space_index + 1)
        if null_index < 0:
            raise CorruptObjectError("tree entry without name terminator")
        hash_end = null_index + 21
        if hash_end > len(payload):
            raise CorruptObjectError("tree entry with truncated hash")

        mode = payload[offset:space_index].decode()
        name = payload[space_index + 1:null_index].decode()
        sha1 = binascii.hexlify(payload[null_index + 1:hash_end]).decode()
        entries.append(RawEntry(mode, name, sha1))
        offset = hash_end
    return entries


def nest_paths(file_hashes): # Builds a nested dictionary {dir: {...}, file: hash} from flat paths
    tree = {}
    for path in sorted(file_hashes):
        parts = path.split('/')
        current_level = tree
        for part in parts[:-1]:
            current_level = current_level.setdefault(part, {})
            if not isinstance(current_level, dict):
                raise MgitError(f"'{path}' is both a file and a directory")
        if isinstance(current_level.get(parts[-1]), dict):
            raise MgitError(f"'{path}' is both a file and a directory")
        current_level[parts[-1]] = file_hashes[path]
    return tree


def write_tree(repo, tree_dict): # Recursively writes a tree object from a nested dictionary and returns its hash
    entries = {}
    for name, value in tree_dict.items():
        if isinstance(value, dict):
            entries[name] = (DIR_MODE, write_tree(repo, value))
        else:
            entries[name] = (FILE_MODE, value)
    return objects.write_tree_object(repo, encode_tree(entries))


def build_tree(repo, file_hashes):
    """Write the tree objects for a flat ``{path: hash}`` mapping.

    Returns the hash of the root tree. An empty mapping yields the empty tree.
    """
    return write_tree(repo, nest_paths(file_hashes))


def read_tree(repo, tree_hash, prefix=''):
    """Read a tree recursively into ``{path: TreeEntry}``.

    Missing or corrupt trees read as empty so callers can treat them as absent.
    """
    files = {}
    if not tree_hash:
        return files
    obj = objects.read_object(repo, tree_hash)
    if obj is None:
        logger.warning("tree %s could not be read", tree_hash)
        return files
    obj_type, payload = obj
    if obj_type != 'tree':
        logger.warning("object %s is a %s, not a tree", tree_hash, obj_type)
        return files

    try:
        entries = decode_tree(payload)
    except (CorruptObjectError, UnicodeDecodeError) as e:
        logger.warning("tree %s is corrupt: %s", tree_hash, e)
        return files

    for entry in entries:
        current_path = prefix + entry.name
        if entry.mode == DIR_MODE:
            files.update(read_tree(repo, entry.hash, current_path + '/'))
        elif entry.mode == FILE_MODE:
            files[current_path] = TreeEntry(entry.mode, entry.hash)
        else:
            logger.warning("skipping %s with unsupported mode %s", current_path, entry.mode)
    return files


def read_tree_hashes(repo, tree_hash):
    return {path: entry.hash for path, entry in read_tree(repo, tree_hash).items()}
