"""
Test fixtures package for hashtree tests.

Provides factory functions and an independent reference computation
of tree roots.

Usage:
    from fixtures import make_values, reference_root

    def test_something():
        values = make_values(5)
        assert build(values).root_hash() == reference_root(values)
"""

from .tree_fixtures import (
    RecordingAlgorithm,
    make_values,
    ref_leaf,
    ref_node,
    reference_root,
)

__all__ = [
    "RecordingAlgorithm",
    "make_values",
    "ref_leaf",
    "ref_node",
    "reference_root",
]
