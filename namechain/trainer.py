#!/usr/bin/env python3
"""Accumulates atom samples into a TransitionGraph."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from namechain.graph import TERMINATOR, TransitionGraph

logger = logging.getLogger(__name__)


class MarkovTrainer:
    """Trains a transition graph one sample at a time"""

    def __init__(self, graph: TransitionGraph):
        self.graph = graph
        self.sample_count = 0

    @property
    def order(self) -> int:
        return self.graph.order

    def add_sample(self, sample: Sequence[str]) -> None:
        """
        Add one atom sequence to the graph.

        Terminators inside the sample are dropped and one is appended at the
        end, so every history learns where names tend to stop.
        """
        atoms: List[str] = [a for a in sample if a != TERMINATOR]
        atoms.append(TERMINATOR)

        chain = self.graph.starting_chain()
        for atom in atoms:
            self.graph.define(chain).add(atom)
            chain.insert(0, atom)
            chain.pop()

        self.sample_count += 1
        logger.debug("Trained sample %r", atoms[:-1])

    def add_samples(self, samples: Iterable[Sequence[str]]) -> int:
        """Add every sample; returns how many were added."""
        added = 0
        for sample in samples:
            self.add_sample(sample)
            added += 1
        return added
