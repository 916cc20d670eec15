# Unit tests for utils/graph.py

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'mgit-project'))

from utils import commits, graph, tree


@pytest.fixture
def make_commit(temp_repo):
    empty_tree = tree.build_tree(temp_repo, {})

    def _make(message, *parents):
        return commits.write_commit(temp_repo, empty_tree, list(parents), message)
    return _make


@pytest.fixture
def diamond(temp_repo, make_commit):
    #     A
    #    / \
    #   B   C
    #    \ /
    #     D
    a = make_commit('A')
    b = make_commit('B', a)
    c = make_commit('C', a)
    d = make_commit('D', b, c)
    return temp_repo, a, b, c, d


class TestGetAncestors:
    # Tests for graph.get_ancestors()

    def test_linear_history_in_bfs_order(self, temp_repo, make_commit):
        c1 = make_commit('1')
        c2 = make_commit('2', c1)
        c3 = make_commit('3', c2)
        assert graph.get_ancestors(temp_repo, c3) == [c3, c2, c1]

    def test_follows_both_parents_once(self, diamond):
        repo, a, b, c, d = diamond
        assert graph.get_ancestors(repo, d) == [d, b, c, a]

    def test_missing_commit_is_a_leaf(self, temp_repo):
        assert graph.get_ancestors(temp_repo, 'f' * 40) == ['f' * 40]


class TestGetAncestorsWithDistance:
    # Tests for graph.get_ancestors_with_distance()

    def test_shortest_distances(self, diamond):
        repo, a, b, c, d = diamond
        assert graph.get_ancestors_with_distance(repo, d) == {d: 0, b: 1, c: 1, a: 2}

    def test_shortcut_edge_wins(self, temp_repo, make_commit):
        # x -> y -> z and x -> z: z is one step away
        z = make_commit('z')
        y = make_commit('y', z)
        x = make_commit('x', y, z)
        assert graph.get_ancestors_with_distance(temp_repo, x)[z] == 1


class TestFindCommonAncestor:
    # Tests for graph.find_common_ancestor()

    def test_ancestor_of_descendant_is_itself(self, temp_repo, make_commit):
        x = make_commit('x')
        y = make_commit('y', x)
        z = make_commit('z', y)
        assert graph.find_common_ancestor(temp_repo, x, z) == x
        assert graph.find_common_ancestor(temp_repo, z, x) == x

    def test_fork_point(self, diamond):
        repo, a, b, c, d = diamond
        assert graph.find_common_ancestor(repo, b, c) == a

    def test_prefers_nearest_base_after_merge(self, diamond, make_commit):
        repo, a, b, c, d = diamond
        e = make_commit('E', d)
        f = make_commit('F', c)
        assert graph.find_common_ancestor(repo, e, f) == c

    def test_unrelated_histories(self, temp_repo, make_commit):
        assert graph.find_common_ancestor(temp_repo, make_commit('one'), make_commit('two')) is None

    def test_tie_break_is_deterministic(self, temp_repo, make_commit):
        # Criss-cross: both m1 and m2 have parents p and q at equal distance
        p = make_commit('p')
        q = make_commit('q')
        m1 = make_commit('m1', p, q)
        m2 = make_commit('m2', q, p)
        assert graph.find_common_ancestor(temp_repo, m1, m2) == min(p, q)
        assert graph.find_common_ancestor(temp_repo, m2, m1) == min(p, q)


class TestIsFastForward:
    # Tests for graph.is_fast_forward()

    def test_ancestor_can_fast_forward(self, diamond):
        repo, a, b, c, d = diamond
        assert graph.is_fast_forward(repo, b, d)
        assert graph.is_fast_forward(repo, a, d)

    def test_descendant_cannot(self, diamond):
        repo, a, b, c, d = diamond
        assert not graph.is_fast_forward(repo, d, b)

    def test_siblings_cannot(self, diamond):
        repo, a, b, c, d = diamond
        assert not graph.is_fast_forward(repo, b, c)

    def test_same_commit(self, diamond):
        repo, a, b, c, d = diamond
        assert graph.is_fast_forward(repo, d, d)


class TestIterHistory:
    # Tests for graph.iter_history()

    def test_first_parent_first(self, diamond):
        repo, a, b, c, d = diamond
        assert [h for h, _ in graph.iter_history(repo, d)] == [d, b, c, a]

    def test_merged_branch_before_shared_root(self, temp_repo, make_commit):
        root = make_commit('root')
        main_tip = make_commit('main', root)
        feature_tip = make_commit('feature', root)
        merged = make_commit('merge', main_tip, feature_tip)

        order = [h for h, _ in graph.iter_history(temp_repo, merged)]

        assert order == [merged, main_tip, feature_tip, root]

    def test_each_commit_once(self, diamond):
        repo, a, b, c, d = diamond
        order = [h for h, _ in graph.iter_history(repo, d)]
        assert len(order) == len(set(order)) == 4

    def test_stops_at_unreadable_commit(self, temp_repo, make_commit):
        child = make_commit('child', 'e' * 40)
        history = list(graph.iter_history(temp_repo, child))
        assert [h for h, _ in history] == [child, 'e' * 40]
        assert history[-1][1] is None
