"""
Module 02 - Index Arithmetic
Position helpers for layered trees under the duplicate-last rule.

Positions are 0-based within a layer. Layer 0 holds the leaf nodes.
"""
from __future__ import annotations


def sibling_index(index: int) -> int:
    """Index of the node paired with ``index`` (flips the lowest bit)."""
    return index ^ 1


def parent_index(index: int) -> int:
    """Index in the next layer up of the parent of ``index``."""
    return index // 2


def is_left_child(index: int) -> bool:
    """True if the node at ``index`` is hashed as the left input of its parent."""
    return index % 2 == 0


def parent_layer_size(size: int) -> int:
    """Number of nodes produced from a layer of ``size`` nodes."""
    return (size + 1) // 2


def layer_sizes(num_leaves: int) -> list[int]:
    """
    Sizes of every layer, leaf layer first, root layer last.

    Example:
        >>> layer_sizes(5)
        [5, 3, 2, 1]
    """
    if num_leaves <= 0:
        return []
    sizes = [num_leaves]
    while sizes[-1] > 1:
        sizes.append(parent_layer_size(sizes[-1]))
    return sizes


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of layers from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    return len(layer_sizes(num_leaves))


__all__ = [
    "compute_tree_depth",
    "is_left_child",
    "layer_sizes",
    "parent_index",
    "parent_layer_size",
    "sibling_index",
]
