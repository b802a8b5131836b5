#!/usr/bin/env python3
"""
Generator Configuration
=======================
Settings for training and generation, filled from the ``generator``
section of app.yaml for every field left as None.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from namechain.errors import ConfigurationError
from namechain.output import resolve_sanitizers
from namechain.settings import get_setting
from namechain.tokenizer import Splitter

# source_splitter and atom_list accept an explicit None, so they use their own marker
_UNSET = object()


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass
class GeneratorConfig:
    """Configuration for a NameGenerator."""
    # Markov chain
    order: Optional[int] = None                   # Number of preceding atoms used as context

    # Length constraints (atoms, not characters)
    atom_min: Optional[int] = None                # Try to produce at least this many atoms
    atom_max: Optional[float] = None              # Stop as soon as possible after this many (inf = no limit)
    rebranching: Optional[int] = None             # Rebranch attempts per walk, 0 disables

    # Tokenization
    source_splitter: Optional[Splitter] = _UNSET  # Splits a raw source into samples
    sample_splitter: Optional[Splitter] = None    # Splits a sample into atoms ("" = characters)
    atom_list: Optional[Sequence[str]] = _UNSET   # Multi-character atoms kept whole

    # Output
    sample_joint: Optional[str] = None            # Placed between atoms
    sample_append: Optional[str] = None           # Added after the last atom
    output_sanitizers: Optional[Sequence[str]] = None

    def __post_init__(self):
        cfg = get_setting("generator", {}) or {}
        if self.order is None:
            self.order = cfg.get("order", 2)
        if self.atom_min is None:
            self.atom_min = cfg.get("atom_min") or 0
        if self.atom_max is None:
            self.atom_max = cfg.get("atom_max")
            if self.atom_max is None:
                self.atom_max = math.inf
        if self.rebranching is None:
            self.rebranching = cfg.get("rebranching") or 0
        if self.source_splitter is _UNSET:
            self.source_splitter = cfg.get("source_splitter")
        if self.sample_splitter is None:
            self.sample_splitter = cfg.get("sample_splitter") or ''
        if self.atom_list is _UNSET:
            self.atom_list = cfg.get("atom_list")
        if self.sample_joint is None:
            self.sample_joint = cfg.get("sample_joint") or ''
        if self.sample_append is None:
            self.sample_append = cfg.get("sample_append") or ''
        if self.output_sanitizers is None:
            self.output_sanitizers = cfg.get("output_sanitizers") or []

        self.validate()

    def validate(self) -> None:
        if not _is_count(self.order) or self.order < 1:
            raise ConfigurationError(f"order must be a positive integer, got {self.order!r}")
        if not _is_count(self.atom_min):
            raise ConfigurationError(f"atom_min must be a non-negative integer, got {self.atom_min!r}")
        if self.atom_max != math.inf and not _is_count(self.atom_max):
            raise ConfigurationError(f"atom_max must be a non-negative integer, got {self.atom_max!r}")
        if not _is_count(self.rebranching):
            raise ConfigurationError(f"rebranching must be a non-negative integer, got {self.rebranching!r}")
        if self.atom_list is not None and (
            isinstance(self.atom_list, str) or not all(isinstance(a, str) for a in self.atom_list)
        ):
            raise ConfigurationError("atom_list must be a list of strings")
        if isinstance(self.output_sanitizers, str):
            self.output_sanitizers = [self.output_sanitizers]
        # Unknown names raise here rather than on first generate()
        resolve_sanitizers(self.output_sanitizers)


def batch_attempts_factor() -> int:
    factor = get_setting("batch.max_attempts_factor", 20)
    if not _is_count(factor) or factor < 1:
        raise ConfigurationError(f"batch.max_attempts_factor must be a positive integer, got {factor!r}")
    return factor
