# Unit tests for utils/diff.py

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'mgit-project'))

from utils import diff as diff_utils
from utils.diff import EQUAL, INSERT, DELETE


def _apply(ops):
    # Rebuilds the new file from an edit script
    return [op.line for op in ops if op.kind != DELETE]


def _original(ops):
    return [op.line for op in ops if op.kind != INSERT]


class TestLineDiff:
    # Tests for diff_utils.line_diff()

    def test_identical(self):
        ops = diff_utils.line_diff(['a', 'b'], ['a', 'b'])
        assert [op.kind for op in ops] == [EQUAL, EQUAL]

    def test_empty_inputs(self):
        assert diff_utils.line_diff([], []) == []
        assert [op.kind for op in diff_utils.line_diff([], ['x'])] == [INSERT]
        assert [op.kind for op in diff_utils.line_diff(['x'], [])] == [DELETE]

    def test_replacement_deletes_before_inserting(self):
        ops = diff_utils.line_diff(['a', 'b', 'c'], ['a', 'x', 'c'])
        assert [(op.kind, op.line) for op in ops] == [
            (EQUAL, 'a'), (DELETE, 'b'), (INSERT, 'x'), (EQUAL, 'c'),
        ]

    def test_pure_insertion_keeps_alignment(self):
        ops = diff_utils.line_diff(['a', 'b', 'c'], ['a', 'new', 'b', 'c'])
        assert [op.kind for op in ops] == [EQUAL, INSERT, EQUAL, EQUAL]

    def test_script_is_minimal(self):
        old = list('ABCABBA')
        new = list('CBABAC')
        ops = diff_utils.line_diff(old, new)
        assert sum(1 for op in ops if op.kind != EQUAL) == 5
        assert _apply(ops) == new
        assert _original(ops) == old

    def test_indices_point_into_inputs(self):
        old = ['1', '2', '3', '4']
        new = ['0', '1', '3', '4', '5']
        for op in diff_utils.line_diff(old, new):
            if op.kind != INSERT:
                assert old[op.old_index] == op.line
            if op.kind != DELETE:
                assert new[op.new_index] == op.line


class TestSplitLines:

    def test_trailing_newline_is_not_a_line(self):
        assert diff_utils.split_lines('a\nb\n') == ['a', 'b']
        assert diff_utils.split_lines('a\nb') == ['a', 'b']
        assert diff_utils.split_lines(b'') == []


class TestBuildHunks:
    # Tests for diff_utils.build_hunks()

    def test_single_change_with_context(self):
        old = [str(i) for i in range(1, 11)]
        new = list(old)
        new[4] = 'five'
        hunks = diff_utils.build_hunks(diff_utils.line_diff(old, new))
        assert len(hunks) == 1
        assert hunks[0].header == '@@ -2,7 +2,7 @@'
        assert hunks[0].lines == [' 2', ' 3', ' 4', '-5', '+five', ' 6', ' 7', ' 8']

    def test_distant_changes_split(self):
        old = [str(i) for i in range(1, 21)]
        new = list(old)
        new[1] = 'two'
        new[18] = 'nineteen'
        hunks = diff_utils.build_hunks(diff_utils.line_diff(old, new))
        assert [h.header for h in hunks] == ['@@ -1,5 +1,5 @@', '@@ -16,5 +16,5 @@']

    def test_close_changes_share_a_hunk(self):
        old = [str(i) for i in range(1, 21)]
        new = list(old)
        new[2] = 'three'
        new[9] = 'ten'   # six unchanged lines in between
        hunks = diff_utils.build_hunks(diff_utils.line_diff(old, new))
        assert len(hunks) == 1

    def test_new_file_starts_at_zero(self):
        hunks = diff_utils.build_hunks(diff_utils.line_diff([], ['a', 'b']))
        assert hunks[0].header == '@@ -0,0 +1,2 @@'


class TestFormatUnifiedDiff:
    # Tests for diff_utils.format_unified_diff()

    def test_no_changes(self):
        assert diff_utils.format_unified_diff('a\n', 'a\n', 'f.txt') == ''

    def test_git_style_output(self):
        text = diff_utils.format_unified_diff('line1\nline2\nline3', 'line1\nmodified line2\nline3', 'file1.txt')
        assert text.split('\n') == [
            'diff --git a/file1.txt b/file1.txt',
            '--- a/file1.txt',
            '+++ b/file1.txt',
            '@@ -1,3 +1,3 @@',
            ' line1',
            '-line2',
            '+modified line2',
            ' line3',
        ]

    def test_added_file_uses_dev_null(self):
        text = diff_utils.format_unified_diff('', 'new\n', 'n.txt', old_missing=True)
        assert '--- /dev/null' in text
        assert '+++ b/n.txt' in text
        assert '+new' in text

    def test_deleted_empty_file_still_reported(self):
        text = diff_utils.format_unified_diff('', '', 'e.txt', new_missing=True)
        assert '+++ /dev/null' in text


class TestCompareStates:

    def test_added_deleted_modified(self):
        result = diff_utils.compare_states({'a': '1', 'b': '2'}, {'b': '3', 'c': '4'})
        assert result == {'added': ['c'], 'deleted': ['a'], 'modified': ['b']}
