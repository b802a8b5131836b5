#!/usr/bin/env python3
"""
Transition Graph
================
Frequency tree of a fixed-order Markov chain over atoms.

The graph is keyed in reverse order: the first key is the most recently
emitted atom, the last key is the oldest one still in the window. For
order 3, the history "abc" is stored under c -> b -> a, and the node at
that path is a Leaf counting which atoms followed "abc".

Keeping the most recent atom first means a prefix of the key is a valid
lookup at a lower effective order, which is what rebranching relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

# Terminator atom, also used to pad the initial history chain
TERMINATOR = ''


@dataclass
class Leaf:
    """Transition counts for one full-length history chain."""
    total: int = 0
    transitions: dict = field(default_factory=dict)

    def add(self, atom: str, count: int = 1) -> None:
        self.total += count
        self.transitions[atom] = self.transitions.get(atom, 0) + count

    @property
    def end_count(self) -> int:
        return self.transitions.get(TERMINATOR, 0)

    @property
    def choices(self) -> int:
        """Number of distinct next atoms (terminator included)."""
        return len(self.transitions)


Node = Union[dict, Leaf]


class TransitionGraph:
    """
    Depth-N trie of transition counts.

    Internal levels are plain dicts mapping atom -> child; the last level
    maps atom -> Leaf. Dict insertion order is preserved and drives the
    tie-break order of weighted selection.
    """

    def __init__(self, order: int):
        if not isinstance(order, int) or isinstance(order, bool) or order < 1:
            raise ValueError(f"order must be a positive integer, got {order!r}")
        self.order = order
        self.root: dict = {}

    def starting_chain(self) -> List[str]:
        """History chain of N terminator placeholders."""
        return [TERMINATOR] * self.order

    def define(self, chain: Sequence[str]) -> Leaf:
        """Return the leaf at ``chain``, creating missing nodes on the way."""
        if len(chain) != self.order:
            raise ValueError(
                f"chain must have exactly {self.order} atoms, got {len(chain)}"
            )
        node = self.root
        for atom in chain[:-1]:
            node = node.setdefault(atom, {})
        leaf = node.get(chain[-1])
        if leaf is None:
            leaf = node[chain[-1]] = Leaf()
        return leaf

    def get(self, chain: Sequence[str]) -> Optional[Node]:
        """
        Return the node at ``chain`` or None when the path does not exist.

        A full-length chain addresses a Leaf, a shorter one an internal
        dict (the empty chain is the root).
        """
        if len(chain) > self.order:
            return None
        node: Node = self.root
        for atom in chain:
            if not isinstance(node, dict) or atom not in node:
                return None
            node = node[atom]
        return node

    def children(self, prefix: Sequence[str]) -> List[str]:
        """Keys of the internal node at a partial chain, in insertion order."""
        if len(prefix) >= self.order:
            raise ValueError("children() needs a chain shorter than the order")
        node = self.get(prefix)
        if node is None:
            return []
        return list(node.keys())

    def leaves(self) -> Iterator[Tuple[List[str], Leaf]]:
        """Iterate over (chain, leaf) pairs, depth first."""
        def walk(node: dict, path: List[str]):
            for atom, child in node.items():
                if isinstance(child, Leaf):
                    yield path + [atom], child
                else:
                    yield from walk(child, path + [atom])

        yield from walk(self.root, [])

    @property
    def leaf_count(self) -> int:
        return sum(1 for _ in self.leaves())

    @property
    def transition_count(self) -> int:
        return sum(leaf.total for _, leaf in self.leaves())

    def atoms(self) -> List[str]:
        """Distinct non-terminator atoms seen as transitions, first-seen order."""
        seen = {}
        for _, leaf in self.leaves():
            for atom in leaf.transitions:
                if atom != TERMINATOR:
                    seen.setdefault(atom, None)
        return list(seen)

    def is_empty(self) -> bool:
        return not self.root

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransitionGraph):
            return NotImplemented
        return self.order == other.order and self.root == other.root

    def __repr__(self) -> str:
        return f"TransitionGraph(order={self.order}, leaves={self.leaf_count})"
