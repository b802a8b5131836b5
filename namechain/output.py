#!/usr/bin/env python3
"""
Output formatting for generated atom sequences.

Sanitizers are referenced by name so they can be listed in app.yaml:

    generator:
      output_sanitizers: [strip, capitalize]
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Sequence

from namechain.errors import ConfigurationError


def _collapse_spaces(text: str) -> str:
    return re.sub(r'\s+', ' ', text)


SANITIZERS: Dict[str, Callable[[str], str]] = {
    'strip': str.strip,
    'lower': str.lower,
    'upper': str.upper,
    'capitalize': str.capitalize,
    'title': str.title,
    'collapse_spaces': _collapse_spaces,
}


def join_atoms(atoms: Sequence[str], joint: str = '', append: str = '') -> str:
    """Join atoms with ``joint`` and add the ``append`` suffix."""
    return joint.join(atoms) + append


def resolve_sanitizers(names: Sequence[str]) -> List[Callable[[str], str]]:
    """Look up sanitizer functions; raises ConfigurationError on unknown names."""
    if isinstance(names, str):
        names = [names]
    unknown = [n for n in names if n not in SANITIZERS]
    if unknown:
        available = ', '.join(sorted(SANITIZERS))
        raise ConfigurationError(
            f"Unknown output sanitizer(s): {', '.join(map(str, unknown))}. "
            f"Available: {available}"
        )
    return [SANITIZERS[n] for n in names]


def sanitize(text: str, sanitizers: Sequence[Callable[[str], str]]) -> str:
    for func in sanitizers:
        text = func(text)
    return text


def format_atoms(atoms: Sequence[str],
                 joint: str = '',
                 append: str = '',
                 sanitizers: Sequence[Callable[[str], str]] = ()) -> str:
    """Join, suffix and sanitize a generated atom sequence."""
    return sanitize(join_atoms(atoms, joint, append), sanitizers)
