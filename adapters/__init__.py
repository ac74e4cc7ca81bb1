"""
Adapters package - External service connections.
Database adapter for the MongoDB product store.
"""

from adapters import mongo_adapter

__all__ = [
    "mongo_adapter",
]
