"""
Error types raised by sqlcraft.

Unsupported dialect features never raise; they degrade and log. Only trees
that could not have been built correctly raise ``ContractViolation``.
"""

from __future__ import annotations


class ContractViolation(AssertionError):
    """
    Raised when an expression tree is internally inconsistent.

    This always indicates a bug in the code that built the tree, never a data
    condition, so callers are not expected to recover from it.
    """


def precondition(condition: bool, message: str) -> None:
    if not condition:
        raise ContractViolation(message)
