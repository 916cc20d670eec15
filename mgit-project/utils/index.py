# What it does: Provides centralized read/write operations for the staging area stored in `index.json`
# How it does: The index is one JSON document mapping each repository-relative path to its blob hash, size and modification time in milliseconds
# What data structure it uses: Dictionary (mapping file paths to IndexEntry tuples of hash, size, mtime)

import json
import logging
import os
from collections import namedtuple

from . import objects

logger = logging.getLogger(__name__)

INDEX_FILE = 'index.json'

IndexEntry = namedtuple('IndexEntry', ['hash', 'size', 'mtime'])


def index_path(repo):
    return repo.path(INDEX_FILE)


def read_index(repo):
    """
    Reads the index file and returns a dictionary {path: IndexEntry}.
    A missing or unreadable index reads as empty.
    """
    path = index_path(repo)
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("could not read index %s: %s", path, e)
        return {}

    entries = {}
    for file_path, info in data.items():
        if isinstance(info, str):
            entries[file_path] = IndexEntry(info, 0, 0)
        else:
            entries[file_path] = IndexEntry(info['hash'], info.get('size', 0), info.get('mtime', 0))
    return entries


def read_index_hashes(repo):
    return {path: entry.hash for path, entry in read_index(repo).items()}


def write_index(repo, index_dict):
    path = index_path(repo)
    os.makedirs(os.path.dirname(path), exist_ok=True)

    data = {}
    for file_path in sorted(index_dict):
        value = index_dict[file_path]
        if isinstance(value, str):
            value = IndexEntry(value, 0, 0)
        data[file_path] = {'hash': value.hash, 'size': value.size, 'mtime': value.mtime}

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)


def stat_entry(repo, rel_path, sha1):
    stats = os.stat(repo.work_path(rel_path))
    return IndexEntry(sha1, stats.st_size, stats.st_mtime_ns // 1_000_000)


def stage_file(repo, rel_path): # Writes the working copy of rel_path as a blob and returns its index entry
    with open(repo.work_path(rel_path), 'rb') as f:
        content = f.read()
    sha1 = objects.write_blob(repo, content)
    return stat_entry(repo, rel_path, sha1)


def index_from_tree(repo, file_hashes): # Builds index entries for a checked-out {path: hash} snapshot
    entries = {}
    for rel_path, sha1 in file_hashes.items():
        full_path = repo.work_path(rel_path)
        if os.path.isfile(full_path):
            entries[rel_path] = stat_entry(repo, rel_path, sha1)
        else:
            entries[rel_path] = IndexEntry(sha1, 0, 0)
    return entries
