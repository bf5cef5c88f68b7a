"""
Custom exceptions for nnlab.

Shape problems are programmer errors: they are raised at the point of misuse
and never retried or recovered from inside the library.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class NnlabError(Exception):
    """Base exception for all nnlab errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ShapeError(NnlabError, ValueError):
    """Raised when a matrix or parameter view does not have the expected shape."""

    def __init__(self, operation: str, expected: Any, actual: Any):
        super().__init__(
            f"{operation}: expected shape {expected}, got {actual}",
            context={"operation": operation, "expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual
