#!/usr/bin/env python3
"""
Markov Chain Name Generator
===========================
Trains a fixed-order Markov chain on example names and walks it to
produce new ones.

Key features:
- Any Markov order, with multi-character atoms
- Minimum / maximum length in atoms
- Rebranching when a high order cannot reach the minimum length
- Injectable random source for reproducible output

Theory:
-------
The chain models P(next_atom | previous_n_atoms). Generation starts from a
window of N terminators, draws the next atom weighted by how often it
followed the current window in training, slides the window and repeats
until the terminator is drawn.

At high orders many windows have a single continuation, often the
terminator itself, so the minimum length cannot be reached. Rebranching
rewrites the oldest not-yet-emitted slot of the window with a sibling
known to the graph, as if the name had started with more atoms, and picks
the rest of the window at random from existing branches.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from namechain.config import GeneratorConfig, batch_attempts_factor
from namechain.errors import ConfigurationError, GraphConsistencyError
from namechain.graph import TERMINATOR, Leaf, TransitionGraph
from namechain.output import format_atoms, resolve_sanitizers
from namechain.rng import RandomSource
from namechain.tokenizer import Tokenizer
from namechain.trainer import MarkovTrainer

logger = logging.getLogger(__name__)

_DEFAULT = object()


class NameGenerator:
    """Trains a transition graph and generates names from it"""

    def __init__(self,
                 config: GeneratorConfig = None,
                 rng=None,
                 **options):
        """
        Initialize an untrained generator.

        Args:
            config: Full configuration (defaults come from app.yaml)
            rng: Random source with random_int()/random_index(); a fresh
                RandomSource is created when omitted
            **options: GeneratorConfig fields overriding ``config``
        """
        if config is None:
            config = GeneratorConfig(**options)
        elif options:
            config = dataclasses.replace(config, **options)
        self.config = config

        self.rng = rng if rng is not None else RandomSource()
        self.graph = TransitionGraph(config.order)
        self.trainer = MarkovTrainer(self.graph)
        self.tokenizer = Tokenizer(
            source_splitter=config.source_splitter,
            sample_splitter=config.sample_splitter,
            atom_list=config.atom_list,
        )
        self.sanitizers = resolve_sanitizers(config.output_sanitizers)
        self._known_samples: Set[Tuple[str, ...]] = set()

    @property
    def order(self) -> int:
        return self.config.order

    @property
    def sample_count(self) -> int:
        return self.trainer.sample_count

    # =========================================================================
    # Training
    # =========================================================================

    def add_samples(self,
                    samples: Union[str, Iterable],
                    source_splitter=_DEFAULT,
                    sample_splitter=_DEFAULT,
                    atom_list=_DEFAULT) -> int:
        """
        Train on a corpus.

        Args:
            samples: A raw string (cut with the source splitter) or an
                iterable of samples, each a string or a list of atoms
            source_splitter: Override of the configured source splitter
            sample_splitter: Override of the configured sample splitter
            atom_list: Override of the configured multi-character atoms

        Returns:
            Number of samples added to the graph

        Raises:
            ConfigurationError: If ``samples`` is a string and no source
                splitter is available
        """
        tokenizer = self.tokenizer
        if not (source_splitter is _DEFAULT and sample_splitter is _DEFAULT
                and atom_list is _DEFAULT):
            tokenizer = dataclasses.replace(
                tokenizer,
                **{
                    key: value for key, value in (
                        ('source_splitter', source_splitter),
                        ('sample_splitter', sample_splitter),
                        ('atom_list', atom_list),
                    )
                    if value is not _DEFAULT
                }
            )

        added = 0
        for atoms in tokenizer.samples(samples):
            self.add_sample(atoms)
            added += 1
        logger.debug("Added %d samples (order=%d)", added, self.order)
        return added

    def add_sample(self, atoms: Sequence[str]) -> None:
        """Train on one atom sequence; terminators inside it are ignored."""
        atoms = [a for a in atoms if a != TERMINATOR]
        self.trainer.add_sample(atoms)
        self._known_samples.add(tuple(atoms))

    def is_known_sample(self, atoms: Sequence[str]) -> bool:
        """True if ``atoms`` is exactly one of the training samples."""
        return tuple(atoms) in self._known_samples

    # =========================================================================
    # Generation
    # =========================================================================

    def generate(self,
                 array_mode: bool = False,
                 sample_joint: Optional[str] = None,
                 sample_append: Optional[str] = None,
                 atom_min: Optional[int] = None,
                 atom_max: Optional[float] = None):
        """
        Generate a single name.

        Args:
            array_mode: Return the list of atoms instead of a string
            sample_joint: Override of the configured joint
            sample_append: Override of the configured suffix
            atom_min: Override of the configured minimum atom count
            atom_max: Override of the configured maximum atom count

        Returns:
            The generated string, or its atoms in array mode

        Raises:
            GraphConsistencyError: If the graph is empty or inconsistent
        """
        atoms = self.walk(
            self.config.atom_min if atom_min is None else atom_min,
            self.config.atom_max if atom_max is None else atom_max,
        )
        if array_mode:
            return atoms
        return self.format(atoms, sample_joint, sample_append)

    def format(self,
               atoms: Sequence[str],
               sample_joint: Optional[str] = None,
               sample_append: Optional[str] = None) -> str:
        """Join, suffix and sanitize atoms the way generate() does."""
        return format_atoms(
            atoms,
            self.config.sample_joint if sample_joint is None else sample_joint,
            self.config.sample_append if sample_append is None else sample_append,
            self.sanitizers,
        )

    def walk(self, atom_min: int = 0, atom_max: float = math.inf) -> List[str]:
        """
        Run one generation walk over the graph.

        Returns:
            Emitted atoms, terminator excluded
        """
        if self.graph.is_empty():
            raise GraphConsistencyError("Cannot generate from an untrained graph")

        chain = self.graph.starting_chain()
        atoms: List[str] = []
        rebranch_count = self.config.rebranching

        while True:
            leaf = self.graph.get(chain)
            if not isinstance(leaf, Leaf):
                raise GraphConsistencyError("Leaf not found during generation", chain=chain)

            choices = leaf.choices

            if len(atoms) < atom_min and leaf.end_count and (choices > 1 or rebranch_count):
                if rebranch_count and choices <= 1:
                    # The only way forward is the terminator
                    new_chain = self.rebranch(chain, len(atoms))
                    if new_chain is None:
                        rebranch_count = 0
                    else:
                        chain = new_chain
                        rebranch_count -= 1
                    continue

                # Too short to stop here, draw among the other atoms
                atom = self._pick(leaf, chain, allow_end=False)
            elif len(atoms) >= atom_max and leaf.end_count:
                atom = TERMINATOR
            else:
                atom = self._pick(leaf, chain)

            if atom == TERMINATOR:
                break

            atoms.append(atom)
            if rebranch_count and len(atoms) >= self.order:
                # The rebranched part of the window has scrolled out
                rebranch_count = 0

            chain.insert(0, atom)
            chain.pop()

        return atoms

    def _pick(self, leaf: Leaf, chain: List[str], allow_end: bool = True) -> str:
        """Draw the next atom weighted by transition counts."""
        total = leaf.total if allow_end else leaf.total - leaf.end_count
        remaining = self.rng.random_int(1, total)

        for atom, count in leaf.transitions.items():
            if not allow_end and atom == TERMINATOR:
                continue
            remaining -= count
            if remaining <= 0:
                return atom

        raise GraphConsistencyError(
            f"Weighted draw left a positive remainder ({remaining})", chain=chain
        )

    def rebranch(self, chain: Sequence[str], place: int) -> Optional[List[str]]:
        """
        Replace ``chain[place]`` with a sibling branch and rebuild the tail.

        The node at ``chain[:place]`` must offer another key than the
        current one. Deeper slots are then picked uniformly among existing
        children, without count weighting, to favour diversity.

        Returns:
            The new chain, or None when there is no sibling to switch to
        """
        new_chain = list(chain)
        keys = self.graph.children(new_chain[:place])
        if len(keys) <= 1:
            logger.debug("No rebranch possible at place %d of %r", place, chain)
            return None

        if chain[place] in keys:
            keys.remove(chain[place])
        key = keys[self.rng.random_index(len(keys))]
        new_chain[place] = key

        for depth in range(place + 1, self.order):
            keys = self.graph.children(new_chain[:depth])
            key = keys[self.rng.random_index(len(keys))]
            new_chain[depth] = key

        logger.debug("Rebranched %r -> %r", list(chain), new_chain)
        return new_chain

    def generate_batch(self,
                       count: int,
                       unique: bool = True,
                       exclude_samples: bool = False,
                       max_attempts: Optional[int] = None,
                       **kwargs) -> list:
        """
        Generate multiple names.

        Args:
            count: Number of names to generate
            unique: Skip names already produced (case-insensitive)
            exclude_samples: Skip names identical to a training sample
            max_attempts: Walks allowed before giving up
                (default: count * batch.max_attempts_factor)
            **kwargs: Additional arguments for generate()

        Returns:
            Up to ``count`` names, fewer if the attempt budget ran out
        """
        if not isinstance(count, int) or count < 0:
            raise ConfigurationError(f"count must be a non-negative integer, got {count!r}")
        if max_attempts is None:
            max_attempts = count * batch_attempts_factor()

        array_mode = kwargs.pop('array_mode', False)
        format_kwargs = {
            'sample_joint': kwargs.pop('sample_joint', None),
            'sample_append': kwargs.pop('sample_append', None),
        }

        results = []
        seen = set()
        attempts = 0

        while len(results) < count and attempts < max_attempts:
            attempts += 1

            atoms = self.generate(array_mode=True, **kwargs)
            if exclude_samples and self.is_known_sample(atoms):
                continue

            name = self.format(atoms, **format_kwargs)
            if unique:
                key = name.lower()
                if key in seen:
                    continue
                seen.add(key)

            results.append(atoms if array_mode else name)

        if len(results) < count:
            logger.warning(
                "Generated %d of %d names in %d attempts", len(results), count, attempts
            )
        return results
