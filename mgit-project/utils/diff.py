# What it does: Compares repository states and produces line-by-line unified diffs
# How it does: `line_diff` is Myers' shortest edit script: it records the furthest reachable x on every diagonal for each edit count, then backtracks from the end to recover equal/insert/delete operations. `build_hunks` groups the operations with context lines and `format_unified_diff` renders them git-style
# What data structure it uses: Dictionary (for states), Set (for path comparisons), List (the V array snapshots that make up the Myers trace)

from collections import namedtuple

EQUAL = 'equal'
INSERT = 'insert'
DELETE = 'delete'

DiffOp = namedtuple('DiffOp', ['kind', 'line', 'old_index', 'new_index'])


class Hunk:
    def __init__(self, old_start, old_count, new_start, new_count, lines):
        self.old_start = old_start
        self.old_count = old_count
        self.new_start = new_start
        self.new_count = new_count
        self.lines = lines

    @property
    def header(self):
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"

    def __repr__(self):
        return f"Hunk({self.header!r})"


def compare_states(state1, state2): # Compares two states represented as {path: hash} dictionaries
    paths1 = set(state1)
    paths2 = set(state2)

    added = sorted(paths2 - paths1)
    deleted = sorted(paths1 - paths2)
    modified = sorted(path for path in paths1 & paths2 if state1[path] != state2[path])

    return {'added': added, 'deleted': deleted, 'modified': modified}


def split_lines(text):
    if isinstance(text, bytes):
        text = text.decode('utf-8', errors='replace')
    if not text:
        return []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def line_diff(old_lines, new_lines):
    """Return the minimal edit script turning old_lines into new_lines."""
    n = len(old_lines)
    m = len(new_lines)
    max_d = n + m
    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace = []

    for d in range(max_d + 1):
        trace.append(list(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and old_lines[x] == new_lines[y]:
                x += 1
                y += 1
            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, old_lines, new_lines, offset)

    return []


def _backtrack(trace, old_lines, new_lines, offset):
    ops = []
    x = len(old_lines)
    y = len(new_lines)

    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[offset + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append(DiffOp(EQUAL, old_lines[x - 1], x - 1, y - 1))
            x -= 1
            y -= 1

        if d > 0:
            if x == prev_x:
                ops.append(DiffOp(INSERT, new_lines[y - 1], None, y - 1))
                y -= 1
            else:
                ops.append(DiffOp(DELETE, old_lines[x - 1], x - 1, None))
                x -= 1

    ops.reverse()
    return ops


def build_hunks(ops, context=3):
    """Group an edit script into hunks with ``context`` unchanged lines around changes.

    Changes separated by at most ``2 * context`` unchanged lines share a hunk.
    """
    change_positions = [i for i, op in enumerate(ops) if op.kind != EQUAL]
    if not change_positions:
        return []

    ranges = []
    start = max(0, change_positions[0] - context)
    end = min(len(ops), change_positions[0] + 1 + context)
    for pos in change_positions[1:]:
        if pos - context <= end:
            end = min(len(ops), pos + 1 + context)
        else:
            ranges.append((start, end))
            start = max(0, pos - context)
            end = min(len(ops), pos + 1 + context)
    ranges.append((start, end))

    hunks = []
    for start, end in ranges:
        # Lines before the hunk tell us where it starts on each side
        old_before = sum(1 for op in ops[:start] if op.kind != INSERT)
        new_before = sum(1 for op in ops[:start] if op.kind != DELETE)
        lines = []
        old_count = new_count = 0
        for op in ops[start:end]:
            if op.kind == EQUAL:
                lines.append(' ' + op.line)
                old_count += 1
                new_count += 1
            elif op.kind == DELETE:
                lines.append('-' + op.line)
                old_count += 1
            else:
                lines.append('+' + op.line)
                new_count += 1
        old_start = old_before + 1 if old_count else old_before
        new_start = new_before + 1 if new_count else new_before
        hunks.append(Hunk(old_start, old_count, new_start, new_count, lines))
    return hunks


def format_unified_diff(old_text, new_text, file_name, context=3, old_missing=False, new_missing=False):
    """Render a git-style unified diff, or '' if the two texts are identical.

    ``old_missing``/``new_missing`` mark an added or deleted file so the
    header uses /dev/null for that side.
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    hunks = build_hunks(line_diff(old_lines, new_lines), context)
    if not hunks and not (old_missing or new_missing):
        return ''

    output = [f"diff --git a/{file_name} b/{file_name}"]
    if old_missing:
        output.append("new file mode 100644")
    elif new_missing:
        output.append("deleted file mode 100644")
    output.append('--- /dev/null' if old_missing else f'--- a/{file_name}')
    output.append('+++ /dev/null' if new_missing else f'+++ b/{file_name}')
    for hunk in hunks:
        output.append(hunk.header)
        output.extend(hunk.lines)
    return '\n'.join(output)
