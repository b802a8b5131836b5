#!/usr/bin/env python3
"""
Sample Tokenizer
================
Turns raw corpus text into training samples and samples into atoms.

- A source string is cut into samples with the source splitter
- A sample string is cut into atoms with the sample splitter
- Atoms from an atom list (e.g. "th", "ch") are kept whole

Splitters are either literal strings or compiled regular expressions.
An empty literal splitter cuts a string into single characters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from namechain.errors import ConfigurationError
from namechain.graph import TERMINATOR

logger = logging.getLogger(__name__)

Splitter = Union[str, re.Pattern]


def is_splitter(value) -> bool:
    return isinstance(value, (str, re.Pattern))


def split_text(text: str, splitter: Splitter) -> List[str]:
    """Split ``text`` on a literal string or compiled pattern."""
    if isinstance(splitter, re.Pattern):
        return [part for part in splitter.split(text) if part is not None]
    if splitter == '':
        return list(text)
    return text.split(splitter)


def atom_pattern(atom_list: Sequence[str]) -> Optional[re.Pattern]:
    """
    Build the multi-character atom matcher.

    Longer atoms are tried first so "sch" wins over "sc". Any other
    character falls through to the ``.`` alternative.
    """
    atoms = sorted({a for a in atom_list if a}, key=len, reverse=True)
    if not atoms:
        return None
    alternatives = '|'.join(re.escape(a) for a in atoms)
    return re.compile(f"({alternatives})|.", re.DOTALL)


def string_to_sample(text: str, sample_splitter: Splitter = '',
                     pattern: Optional[re.Pattern] = None) -> List[str]:
    """Split one sample string into atoms, dropping empty ones."""
    if pattern is None:
        return [a for a in split_text(text, sample_splitter) if a != TERMINATOR]

    sample: List[str] = []
    pending = ''
    for match in pattern.finditer(text):
        if match.group(1):
            if pending:
                sample.extend(split_text(pending, sample_splitter))
                pending = ''
            sample.append(match.group(1))
        else:
            pending += match.group(0)

    if pending:
        sample.extend(split_text(pending, sample_splitter))

    return [a for a in sample if a != TERMINATOR]


@dataclass
class Tokenizer:
    """Splitting rules applied to a training source."""
    source_splitter: Optional[Splitter] = None
    sample_splitter: Splitter = ''
    atom_list: Optional[Sequence[str]] = None

    def __post_init__(self):
        if self.source_splitter is not None and not is_splitter(self.source_splitter):
            raise ConfigurationError(
                f"source_splitter must be a string or compiled pattern, got {self.source_splitter!r}"
            )
        if not is_splitter(self.sample_splitter):
            raise ConfigurationError(
                f"sample_splitter must be a string or compiled pattern, got {self.sample_splitter!r}"
            )
        self._pattern = atom_pattern(self.atom_list) if self.atom_list else None

    def split_source(self, source: Union[str, Iterable]) -> List:
        """Cut a raw source into sample items without tokenizing them."""
        if isinstance(source, str):
            if self.source_splitter is None:
                raise ConfigurationError(
                    "A string source needs a source_splitter; pass a list of samples instead"
                )
            return split_text(source, self.source_splitter)
        return list(source)

    def tokenize(self, item) -> Optional[List[str]]:
        """Atoms for one sample item, or None when the item is not usable."""
        if isinstance(item, str):
            return string_to_sample(item, self.sample_splitter, self._pattern)
        if isinstance(item, (list, tuple)):
            return [a for a in item if a != TERMINATOR]
        return None

    def samples(self, source: Union[str, Iterable]) -> Iterator[List[str]]:
        """
        Yield the atom list of every non-empty sample in ``source``.

        The source is split eagerly, so a missing source splitter is reported
        before the first sample is yielded.
        """
        items = self.split_source(source)
        return self._iter_samples(items)

    def _iter_samples(self, items: List) -> Iterator[List[str]]:
        for item in items:
            atoms = self.tokenize(item)
            if atoms is None:
                logger.debug("Skipping unsupported sample %r", item)
                continue
            if not atoms:
                continue
            yield atoms
