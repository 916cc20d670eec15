# What it does: Reads, writes and removes files in the working tree on behalf of checkout and merge
# How it does: Existence is checked explicitly before reading or deleting, so a missing file is a normal None/False result instead of an exception
# What data structure it uses: Dictionary ({path: hash} snapshots of the working tree)

import os

from . import objects, ignore


def read_file(repo, rel_path): # Returns the file's bytes, or None if it is not a regular file on disk
    full_path = repo.work_path(rel_path)
    if not os.path.isfile(full_path):
        return None
    with open(full_path, 'rb') as f:
        return f.read()


def write_file(repo, rel_path, content):
    full_path = repo.work_path(rel_path)
    dir_name = os.path.dirname(full_path)
    if dir_name:
        os.makedirs(dir_name, exist_ok=True)
    with open(full_path, 'wb') as f:
        f.write(content)


def remove_file(repo, rel_path): # Deletes the file and any directories it leaves empty; returns False if it was already gone
    full_path = repo.work_path(rel_path)
    if not os.path.isfile(full_path):
        return False
    os.remove(full_path)

    parent = os.path.dirname(full_path)
    while parent != repo.root and parent.startswith(repo.root) and not os.listdir(parent):
        os.rmdir(parent)
        parent = os.path.dirname(parent)
    return True


def hash_working_file(repo, rel_path): # Returns the blob hash of the working copy without storing it, or None if missing
    content = read_file(repo, rel_path)
    if content is None:
        return None
    return objects.hash_object(repo, content, 'blob', write=False)


def working_state(repo): # Returns {path: blob hash} for every non-ignored file in the working tree
    state = {}
    for rel_path in ignore.list_working_files(repo):
        sha1 = hash_working_file(repo, rel_path)
        if sha1 is not None:
            state[rel_path] = sha1
    return state


def checkout_blob(repo, rel_path, sha1): # Writes the blob's content to rel_path; returns False if the blob is unreadable
    content = objects.read_blob(repo, sha1)
    if content is None:
        return False
    write_file(repo, rel_path, content)
    return True
