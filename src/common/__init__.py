"""
Common utilities for the choice engine.

Modules:
- config: environment configuration, storage/registry construction, logging setup
"""

__all__ = [
    "config",
]
