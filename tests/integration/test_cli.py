# End-to-end tests driving the argparse entry point

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'mgit-project'))

import mgit

from conftest import write_file
from utils import repository


def run_cli(*argv):
    # Runs one mgit command and returns its exit code (0 when it returned normally)
    try:
        mgit.main(list(argv))
    except SystemExit as e:
        return e.code
    return 0


@pytest.fixture
def cli_repo(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv('MGIT_AUTHOR_NAME', 'Test User')
    monkeypatch.setenv('MGIT_AUTHOR_EMAIL', 'test@example.com')
    assert run_cli('init') == 0
    return repository.find_repo(temp_dir)


class TestCommandLine:

    def test_init_reports_location(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        assert run_cli('init') == 0
        assert 'Initialized empty mgit repository' in capsys.readouterr().out

        assert run_cli('init') == 0
        assert 'Reinitialized existing' in capsys.readouterr().out

    def test_custom_meta_dir(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert run_cli('--meta-dir', '.vcs', 'init') == 0
        assert os.path.isdir(os.path.join(temp_dir, '.vcs', 'objects'))
        assert not os.path.exists(os.path.join(temp_dir, '.mgit'))

    def test_outside_repository_is_fatal(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        assert run_cli('status') == 1
        err = capsys.readouterr().err
        assert err.startswith('fatal: not a mgit repository')
        assert '.mgit' in err

    def test_commit_and_log(self, cli_repo, capsys):
        write_file(cli_repo, 'hello.txt', 'hello\n')
        assert run_cli('add', 'hello.txt') == 0
        assert run_cli('commit', '-m', 'Say hello') == 0
        out = capsys.readouterr().out
        assert "Added 'hello.txt' to the index." in out
        assert '[main ' in out and '] Say hello' in out

        assert run_cli('log') == 0
        out = capsys.readouterr().out
        assert out.startswith('commit ')
        assert 'Author: Test User <test@example.com>' in out
        assert '    Say hello' in out

    def test_log_without_commits(self, cli_repo, capsys):
        assert run_cli('log') == 1
        assert "does not have any commits yet" in capsys.readouterr().err

    def test_add_missing_file_fails(self, cli_repo, capsys):
        assert run_cli('add', 'ghost.txt') == 1
        assert "ghost.txt" in capsys.readouterr().err

    def test_commit_nothing_staged(self, cli_repo, capsys):
        assert run_cli('commit', '-m', 'empty') == 1
        assert capsys.readouterr().err.startswith('fatal: nothing to commit')

    def test_branch_checkout_merge(self, cli_repo, capsys):
        write_file(cli_repo, 'a.txt', 'a\n')
        run_cli('add', '.')
        run_cli('commit', '-m', 'base')
        assert run_cli('checkout', '-b', 'feature') == 0
        write_file(cli_repo, 'b.txt', 'b\n')
        run_cli('add', 'b.txt')
        run_cli('commit', '-m', 'feature work')
        assert run_cli('checkout', 'main') == 0
        capsys.readouterr()

        assert run_cli('branch') == 0
        assert capsys.readouterr().out == '  feature\n* main\n'

        assert run_cli('merge', 'feature') == 0
        out = capsys.readouterr().out
        assert 'Fast-forward' in out
        assert ' create b.txt' in out

    def test_conflicting_merge_exits_nonzero(self, cli_repo, capsys):
        write_file(cli_repo, 'f.txt', 'base\n')
        run_cli('add', 'f.txt')
        run_cli('commit', '-m', 'base')
        run_cli('checkout', '-b', 'feature')
        write_file(cli_repo, 'f.txt', 'feature\n')
        run_cli('add', 'f.txt')
        run_cli('commit', '-m', 'feature')
        run_cli('checkout', 'main')
        write_file(cli_repo, 'f.txt', 'main\n')
        run_cli('add', 'f.txt')
        run_cli('commit', '-m', 'main')
        capsys.readouterr()

        assert run_cli('merge', 'feature') == 1
        out = capsys.readouterr().out
        assert 'CONFLICT (modify-modify): Merge conflict in f.txt' in out

        assert run_cli('status') == 0
        assert 'You have unmerged paths.' in capsys.readouterr().out

    def test_invalid_branch_name(self, cli_repo, capsys):
        write_file(cli_repo, 'a.txt', 'a\n')
        run_cli('add', 'a.txt')
        run_cli('commit', '-m', 'base')
        capsys.readouterr()

        assert run_cli('branch', 'bad name') == 1
        assert 'not a valid branch name' in capsys.readouterr().err

    def test_config_rejects_bad_key(self, cli_repo, capsys):
        assert run_cli('config', 'nodot', 'value') == 1
        assert "section.key" in capsys.readouterr().err

    def test_diff_rejects_three_commits(self, cli_repo):
        assert run_cli('diff', 'a', 'b', 'c') == 2
