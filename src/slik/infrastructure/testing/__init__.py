"""
Testing utilities module.

Provides helpers and utilities for testing applications using slik.
"""

from .utilities import IsolatedScopes, TestContainer, clear_scopes, create_test_container

__all__ = [
    "TestContainer",
    "create_test_container",
    "IsolatedScopes",
    "clear_scopes",
]
