"""
Error types for namechain.
"""

from __future__ import annotations


class NamechainError(Exception):
    """Base class for every error raised by namechain."""


class ConfigurationError(NamechainError, ValueError):
    """
    Invalid or incomplete configuration.

    Raised before any graph mutation or generation walk starts, for example
    when a raw string source is given without a source splitter, or when an
    order, length bound or sanitizer name is invalid.
    """


class GraphConsistencyError(NamechainError, RuntimeError):
    """
    Fatal inconsistency found while walking the transition graph.

    This indicates a bug in graph construction or traversal rather than a
    recoverable runtime condition: a history chain that must exist is absent,
    or a weighted draw did not resolve to any transition.

    Args:
        message: Human readable description
        chain: History chain being looked up when the error occurred
    """

    def __init__(self, message: str, *, chain: list[str] | None = None) -> None:
        self.chain = list(chain) if chain is not None else None
        if chain is not None:
            message = f"{message}: chain={self.chain!r}"
        super().__init__(message)
