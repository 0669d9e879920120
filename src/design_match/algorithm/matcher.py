"""Optimal bipartite assignment with an np.inf guard.

Wraps scipy's ``linear_sum_assignment`` so that infinite-cost cells never
reach the solver (which would raise ``ValueError``).  After assignment,
pairs that landed on originally-infinite positions are filtered out.

Guard value formula: ``max(|finite costs|) * 2.0 + 1.0``.

The fallback matcher minimizes negated similarity scores, so its finite
costs are all zero or negative.  Taking ``max(finite costs) * 2.0 + 1.0``
over those raw values would put the guard at or below the finite cells
once the largest cost reaches -1, and the solver would then prefer
forbidden pairs.  The absolute value keeps the guard above every finite
cell for any sign.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["hungarian_match"]


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute the minimum-cost assignment, skipping forbidden cells.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  ``np.inf`` marks
            a forbidden pairing.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays, with any pair
        whose original cost was infinite removed.  Empty arrays when no
        valid assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)
    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(np.abs(cost[~inf_mask]).max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind
