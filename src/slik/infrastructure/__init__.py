"""
Infrastructure layer - Tooling around the container.

This layer contains helpers for code that uses slik, such as test utilities.
It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
