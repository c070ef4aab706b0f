from __future__ import annotations

import math
from fractions import Fraction

from cuboid_packer.models import Box, GridFit


def axis_copies(container_edge: float, edge: float) -> int:
    """floor(container_edge / edge); exact when the float quotient overflows."""
    quotient = container_edge / edge
    if math.isfinite(quotient):
        return math.floor(quotient)
    return math.floor(Fraction(container_edge) / Fraction(edge))


def _scaled(value: float, n: int) -> float:
    """n * value, through Fraction when n is too large to convert to float."""
    try:
        return value * n
    except OverflowError:
        return float(Fraction(value) * n)


def grid_fit(orientation: Box, container: Box) -> GridFit:
    """Copies of one orientation laid on a uniform grid, counted per axis."""
    return GridFit(
        nx=axis_copies(container.length, orientation.length),
        ny=axis_copies(container.width, orientation.width),
        nz=axis_copies(container.height, orientation.height),
    )


def occupied_block(orientation: Box, grid: GridFit) -> Box:
    """Sub-volume of the container covered by the grid of copies."""
    return Box(
        _scaled(orientation.length, grid.nx),
        _scaled(orientation.width, grid.ny),
        _scaled(orientation.height, grid.nz),
    )


def compute_efficiency(count: int, unit_volume: float, container_volume: float) -> float:
    """Efficiency = 100 * packed volume / container volume."""
    if count == 0 or container_volume == 0.0:
        return 0.0
    try:
        return 100.0 * (count * unit_volume) / container_volume
    except OverflowError:
        return float(100 * count * Fraction(unit_volume) / Fraction(container_volume))
