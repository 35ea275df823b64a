"""
Minimum-energy seam search.

A vertical seam is one column index per row, with consecutive rows
differing by at most one column. The optimal seam is found with dynamic
programming: a cumulative cost matrix is filled top to bottom, then the
path is traced back from the cheapest cell in the last row.

Horizontal seams are not handled here; the carver transposes the grid
and reuses the vertical search.
"""

import torch
from typing import List, Optional, Sequence, Union

TIE_BREAKS = ('leftmost', 'rightmost', 'prefer_center')


def _check_energy(energy: torch.Tensor) -> None:
    if energy.dim() != 2:
        raise ValueError(f"Energy map must be 2-D, got shape {tuple(energy.shape)}")
    H, W = energy.shape
    if H == 0 or W == 0:
        raise ValueError(f"Energy map must be non-empty, got {H}x{W}")


def cumulative_cost(energy: torch.Tensor) -> torch.Tensor:
    """
    Fill the DP table M for vertical seams.

    M[0] = energy[0]
    M[i, j] = energy[i, j] + min(M[i-1, j-1], M[i-1, j], M[i-1, j+1])

    Out-of-range neighbours are skipped (no wraparound).

    Args:
        energy: Energy map (H, W)

    Returns:
        Cumulative cost matrix (H, W), same dtype as energy
    """
    _check_energy(energy)
    H, W = energy.shape

    M = energy.clone()
    if energy.is_floating_point():
        fill = float('inf')
    else:
        fill = torch.iinfo(energy.dtype).max

    for i in range(1, H):
        # Shifted versions of previous row's cumulative cost
        M_prev = M[i - 1]
        M_left = torch.full((W,), fill, dtype=energy.dtype, device=energy.device)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), fill, dtype=energy.dtype, device=energy.device)
        M_right[:-1] = M_prev[1:]

        # The centre candidate always exists, so the fill value never wins
        best = torch.minimum(torch.minimum(M_left, M_prev), M_right)
        M[i] = energy[i] + best

    return M


def _choose(costs: List, candidates: Sequence[int], tie_break: str,
            center: Optional[int] = None) -> int:
    """Pick the cheapest candidate column, resolving ties by policy."""
    lowest = min(costs[k] for k in candidates)
    tied = [k for k in candidates if costs[k] == lowest]

    if tie_break == 'rightmost':
        return tied[-1]
    if tie_break == 'prefer_center' and center in tied:
        return center
    return tied[0]


def find_vertical_seam(energy: torch.Tensor, tie_break: str = 'leftmost') -> torch.Tensor:
    """
    Find the minimum-total-energy vertical seam.

    The seam ends at the cheapest cell of the last row of the cumulative
    cost matrix and is traced upward through {prev-1, prev, prev+1}.

    Tie-break policies:
        'leftmost': smallest column among equal costs, everywhere
        'rightmost': largest column among equal costs, everywhere
        'prefer_center': leftmost in the last row; while tracing, stay in
            the same column if it is among the cheapest, else go left

    Args:
        energy: Energy map (H, W)
        tie_break: One of TIE_BREAKS

    Returns:
        Seam indices (H,), int64, one column per row
    """
    if tie_break not in TIE_BREAKS:
        raise ValueError(f"Invalid tie_break: {tie_break!r}. Must be one of {TIE_BREAKS}.")

    M = cumulative_cost(energy)
    H, W = M.shape
    costs = M.tolist()

    seam = [0] * H
    seam[H - 1] = _choose(costs[H - 1], range(W),
                          'rightmost' if tie_break == 'rightmost' else 'leftmost')

    for i in range(H - 1, 0, -1):
        prev = seam[i]
        left = max(0, prev - 1)
        right = min(W - 1, prev + 1)
        seam[i - 1] = _choose(costs[i - 1], range(left, right + 1), tie_break, center=prev)

    return torch.tensor(seam, dtype=torch.long, device=energy.device)


def seam_cost(energy: torch.Tensor, seam: Union[torch.Tensor, Sequence[int]]):
    """Total energy along a vertical seam."""
    seam = torch.as_tensor(seam, dtype=torch.long, device=energy.device)
    rows = torch.arange(energy.shape[0], device=energy.device)
    return energy[rows, seam].sum().item()


def is_connected(seam: Union[torch.Tensor, Sequence[int]]) -> bool:
    """True if consecutive seam entries differ by at most one column."""
    seam = torch.as_tensor(seam, dtype=torch.long)
    if seam.numel() < 2:
        return True
    return bool((torch.abs(seam[1:] - seam[:-1]) <= 1).all())
