"""Naive generalized suffix tree."""

from naive_gst.suffix_tree import (
    FIRST_TERMINATOR,
    MAX_CODE_POINT,
    CapacityExceededError,
    GeneralizedSuffixTree,
    InvalidStringError,
)
from naive_gst.tree import Node, Tree, check_trie_property, visualize_tree

__all__ = [
    "FIRST_TERMINATOR",
    "MAX_CODE_POINT",
    "CapacityExceededError",
    "GeneralizedSuffixTree",
    "InvalidStringError",
    "Node",
    "Tree",
    "check_trie_property",
    "visualize_tree",
]
