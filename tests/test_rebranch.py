"""
Tests for Rebranching
=====================
Tests for NameGenerator.rebranch() and its use by the walk when a high
Markov order cannot reach the minimum length.

The order-3 graph trained on "ab" and "cabd" looks like this (chains are
most-recent-first):

    ['', '', '']  -> a, c
    ['a', '', ''] -> b
    ['b', 'a', ''] -> <end>       only choice: a dead end before 3 atoms
    ['c', '', ''] -> a
    ['a', 'c', ''] -> b
    ['b', 'a', 'c'] -> d
    ['d', 'b', 'a'] -> <end>
"""

import pytest

from namechain import NameGenerator, RandomSource
from namechain.corpus import get_corpus
from namechain.graph import Leaf


def make(rng, **options):
    gen = NameGenerator(rng=rng, order=3, **options)
    gen.add_samples(['ab', 'cabd'])
    return gen


class TestRebranch:
    """Tests for rebranch() itself."""

    def test_switches_to_sibling(self, min_rng):
        gen = make(min_rng)
        assert gen.rebranch(['b', 'a', ''], 2) == ['b', 'a', 'c']

    def test_keeps_positions_before_place(self, max_rng):
        gen = make(max_rng)
        new_chain = gen.rebranch(['b', 'a', ''], 2)
        assert new_chain[:2] == ['b', 'a']

    def test_no_sibling(self, min_rng):
        gen = make(min_rng)
        # Only 'b' ever preceded 'd'
        assert gen.rebranch(['d', 'b', 'a'], 1) is None

    def test_does_not_mutate_input(self, min_rng):
        gen = make(min_rng)
        chain = ['b', 'a', '']
        gen.rebranch(chain, 2)
        assert chain == ['b', 'a', '']

    def test_rebuilds_tail_from_existing_branches(self, scripted_rng):
        # Root keys are ['', 'a', 'b', 'c', 'd']; '' is removed first
        rng = scripted_rng([], indexes=[0, 0, 0])
        gen = make(rng)
        new_chain = gen.rebranch(['', '', ''], 0)
        assert new_chain == ['a', '', '']
        assert isinstance(gen.graph.get(new_chain), Leaf)
        assert [call[1] for call in rng.calls] == [4, 2, 1]

    def test_tail_is_unweighted(self, scripted_rng):
        rng = scripted_rng([], indexes=[3, 0, 0])
        gen = make(rng)
        # Keys after removing '': ['a', 'b', 'c', 'd'] -> 'd', then ['b'] -> 'b'
        new_chain = gen.rebranch(['', '', ''], 0)
        assert new_chain[:2] == ['d', 'b']

    @pytest.mark.parametrize("seed", range(20))
    def test_result_always_in_graph(self, seed):
        gen = NameGenerator(rng=RandomSource(seed), order=4)
        gen.add_samples(get_corpus('roman'))
        chain = gen.graph.starting_chain()
        for place in range(4):
            new_chain = gen.rebranch(chain, place)
            if new_chain is not None:
                assert isinstance(gen.graph.get(new_chain), Leaf)
                assert new_chain[:place] == chain[:place]


class TestWalkWithRebranching:
    """Tests for the walk's use of rebranching."""

    def test_dead_end_without_rebranching(self, min_rng):
        gen = make(min_rng, atom_min=3)
        assert gen.generate(array_mode=True) == ['a', 'b']

    def test_rebranching_reaches_minimum(self, min_rng):
        gen = make(min_rng, atom_min=3, rebranching=1)
        assert gen.generate(array_mode=True) == ['a', 'b', 'd']

    def test_failed_rebranch_falls_back(self, min_rng):
        # Single sample: no sibling anywhere, so the walk ends normally
        gen = NameGenerator(rng=min_rng, order=3, atom_min=5, rebranching=3)
        gen.add_samples(['ab'])
        assert gen.generate(array_mode=True) == ['a', 'b']

    @pytest.mark.parametrize("budget", [1, 2])
    def test_budget_limits_attempts(self, scripted_rng, budget):
        # Every rebranch lands on another dead end and uses one index draw
        rng = scripted_rng([1, 1, 1], indexes=[0] * budget)
        gen = NameGenerator(rng=rng, order=3, atom_min=3, rebranching=budget)
        gen.add_samples(['ab', 'cab'])
        assert gen.generate(array_mode=True) == ['a', 'b']
        assert sum(1 for call in rng.calls if call[0] == 'index') == budget

    def test_rebranching_disabled_after_order_atoms(self, min_rng):
        # Past the window size the walk never rebranches
        gen = NameGenerator(rng=min_rng, order=1, atom_min=5, rebranching=5)
        gen.add_samples(['ab', 'xb', 'xc'])
        assert gen.generate(array_mode=True) == ['a', 'b']

