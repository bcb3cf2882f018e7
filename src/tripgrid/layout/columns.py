from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

from tripgrid.items.model import TimedItem, epoch_us, valid_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColumnSlot:
    """Column of an item within its overlap cluster on one day."""

    column: int
    total_columns: int

    @property
    def width(self) -> float:
        return 1.0 / self.total_columns

    @property
    def left(self) -> float:
        return self.column / self.total_columns


ColumnAssignment = dict[str, ColumnSlot]


def overlap_matrix(starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    """Pairwise strict overlap: ``a.start < b.end and a.end > b.start``."""
    return (starts[:, None] < ends[None, :]) & (ends[:, None] > starts[None, :])


def _assign_columns(starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    """Greedy interval colouring; returns the raw column of every item."""
    n = len(starts)
    # lexsort keys are read last-to-first: start, then end, then duration.
    order = np.lexsort((ends - starts, ends, starts))

    column_of = np.empty(n, dtype=np.int64)
    last_start = np.empty(0, dtype=np.int64)
    last_end = np.empty(0, dtype=np.int64)

    for i in order:
        busy = (starts[i] < last_end) & (ends[i] > last_start)
        free = np.flatnonzero(~busy)
        if free.size:
            col = int(free[0])
            last_start[col] = starts[i]
            last_end[col] = ends[i]
        else:
            col = len(last_end)
            last_start = np.append(last_start, starts[i])
            last_end = np.append(last_end, ends[i])
        column_of[i] = col

    return column_of


def pack_columns(items: Sequence[TimedItem]) -> ColumnAssignment:
    """
    Assign overlapping items of one day to side-by-side display columns.

    Columns are found by first-fit over items sorted by (start, end, shorter
    first).  Each maximal overlap cluster is then ranked on its own, so the
    column count of one cluster never widens an unrelated one.  Items whose
    range does not parse are left out.
    """
    ids: list[str] = []
    ranges: list[tuple[int, int]] = []
    for item in items:
        rng = valid_range(item)
        if rng is None:
            continue
        ids.append(item.id)
        ranges.append((epoch_us(rng[0]), epoch_us(rng[1])))

    if not ids:
        return {}

    bounds = np.array(ranges, dtype=np.int64)
    starts, ends = bounds[:, 0], bounds[:, 1]
    column_of = _assign_columns(starts, ends)

    n_clusters, labels = connected_components(
        csr_matrix(overlap_matrix(starts, ends)), directed=False
    )

    result: ColumnAssignment = {}
    for label in range(n_clusters):
        members = np.flatnonzero(labels == label)
        used = np.unique(column_of[members])
        ranks = np.searchsorted(used, column_of[members])
        for member, rank in zip(members, ranks):
            result[ids[member]] = ColumnSlot(int(rank), len(used))

    logger.debug(
        "Packed %d items into %d columns across %d clusters",
        len(ids), int(column_of.max()) + 1, n_clusters,
    )
    return {item_id: result[item_id] for item_id in ids}
