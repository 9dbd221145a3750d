"""
Segment taxonomy lookups: first-level segments and the default segment type.
"""

from __future__ import annotations

from typing import List, Optional, Set

from .dataset import MarketDataset


def get_first_level_segments(
    dataset: Optional[MarketDataset], segment_type: str
) -> List[str]:
    """
    Top of the segment tree for one segmentation axis.

    A segment is first level when it is a parent that nobody lists as a
    child, or a standalone item that is neither parent nor child. A
    segment listed under any parent is never first level, even when
    several parents list it. Only direct edges are consulted.

    Returns the names sorted ascending; ``[]`` for an unknown axis.
    """
    if dataset is None:
        return []
    dimension = dataset.segments.get(segment_type)
    if dimension is None:
        return []

    hierarchy = dimension.hierarchy
    all_children: Set[str] = {child for children in hierarchy.values() for child in children}

    first_level: Set[str] = {
        parent
        for parent, children in hierarchy.items()
        if children and parent not in all_children
    }
    # Standalone items: neither parents nor children
    first_level.update(
        item
        for item in dimension.items
        if item not in all_children and item not in hierarchy
    )
    return sorted(first_level)


def get_first_segment_type(dataset: Optional[MarketDataset]) -> Optional[str]:
    """First segmentation axis in the dataset's own order, or ``None``."""
    if dataset is None:
        return None
    return next(iter(dataset.segments), None)
