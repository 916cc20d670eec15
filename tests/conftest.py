# Shared pytest fixtures for mgit tests

import pytest
import os
import sys
import shutil
import tempfile

# Add mgit-project to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'mgit-project'))

from commands import init, add, commit, checkout
from utils import repository


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized mgit repository in a temporary directory
    repo, _ = init.init_repository(temp_dir)
    return repo


def write_file(repo, rel_path, content):
    full_path = repo.work_path(rel_path)
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    with open(full_path, 'w') as f:
        f.write(content)


def read_file(repo, rel_path):
    with open(repo.work_path(rel_path), 'r') as f:
        return f.read()


def commit_files(repo, files, message):
    # Writes, stages and commits {path: content}; returns the commit hash
    for rel_path, content in files.items():
        write_file(repo, rel_path, content)
    add.add_paths(repo, list(files))
    return commit.create_commit(repo, message)


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file
    commit_hash = commit_files(temp_repo, {'README.md': '# Test Project\n'}, 'Initial commit')
    return temp_repo, commit_hash


@pytest.fixture
def repo_with_branches(repo_with_commit):
    # Creates a repo with main and a feature branch at the same commit
    repo, initial_commit = repo_with_commit
    repository.create_branch(repo, 'feature', initial_commit)
    return repo, initial_commit


@pytest.fixture
def diverged_repo(temp_repo):
    # main and feature both changed 'shared.txt' since their common base
    base = commit_files(temp_repo, {'shared.txt': 'line1\nline2\nline3\n'}, 'base')
    checkout.checkout(temp_repo, 'feature', create_new=True)
    feature_tip = commit_files(temp_repo, {'shared.txt': 'line1\nfeature\nline3\n'}, 'feature edit')
    checkout.checkout(temp_repo, 'main')
    main_tip = commit_files(temp_repo, {'shared.txt': 'line1\nmain\nline3\n'}, 'main edit')
    return temp_repo, base, main_tip, feature_tip
