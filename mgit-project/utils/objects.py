# What it does: Manages the low-level object database, handling the storage and retrieval of blobs, trees and commits
# How it does: It implements a content-addressed storage system. `hash_object` wraps content in a "<type> <size>\0" header, hashes the whole envelope and saves it compressed. `read_object` inflates it again and strips the header
# What data structure it uses: Hash Table / Dictionary (the entire object store is a content-addressed dictionary where the SHA-1 hash is the key)

import hashlib
import logging
import os
import zlib

logger = logging.getLogger(__name__)

OBJECT_TYPES = ('blob', 'tree', 'commit')


def object_path(repo, sha1):
    return repo.path('objects', sha1[:2], sha1[2:])


def envelope(content, obj_type):
    return f'{obj_type} {len(content)}\0'.encode() + content


def hash_object(repo, content, obj_type, write=True): # Hashes content and optionally writes it as an object of the given type ('blob', 'tree', 'commit')
    if obj_type not in OBJECT_TYPES:
        raise ValueError(f"unknown object type: {obj_type}")
    data = envelope(content, obj_type)
    sha1 = hashlib.sha1(data).hexdigest()

    if write:
        path = object_path(repo, sha1)
        # Objects are write-once
        if not os.path.exists(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as f:
                f.write(zlib.compress(data))
            logger.debug("wrote %s %s (%d bytes)", obj_type, sha1, len(content))

    return sha1


def write_blob(repo, content):
    return hash_object(repo, content, 'blob')


def write_tree_object(repo, payload):
    return hash_object(repo, payload, 'tree')


def write_commit_object(repo, payload):
    return hash_object(repo, payload, 'commit')


def object_exists(repo, sha1):
    return bool(sha1) and os.path.isfile(object_path(repo, sha1))


def read_object(repo, sha1): # Reads an object by its SHA-1 hash and returns (type, content), or None if missing or corrupt
    if not sha1 or len(sha1) < 3:
        return None
    path = object_path(repo, sha1)
    if not os.path.isfile(path):
        return None

    with open(path, 'rb') as f:
        compressed_data = f.read()

    try:
        data = zlib.decompress(compressed_data)
    except zlib.error as e:
        logger.warning("object %s is corrupt: %s", sha1, e)
        return None

    null_byte_index = data.find(b'\0')
    if null_byte_index < 0:
        logger.warning("object %s has no header", sha1)
        return None

    header = data[:null_byte_index].decode(errors='replace')
    content = data[null_byte_index + 1:]
    parts = header.split(' ')
    if len(parts) != 2 or parts[0] not in OBJECT_TYPES or not parts[1].isdigit():
        logger.warning("object %s has a malformed header %r", sha1, header)
        return None
    obj_type, size = parts[0], int(parts[1])
    if size != len(content):
        logger.warning("object %s declares %d bytes but holds %d", sha1, size, len(content))
        return None

    return obj_type, content


def read_blob(repo, sha1):
    obj = read_object(repo, sha1)
    if obj is None:
        return None
    obj_type, content = obj
    if obj_type != 'blob':
        logger.warning("object %s is a %s, not a blob", sha1, obj_type)
        return None
    return content
