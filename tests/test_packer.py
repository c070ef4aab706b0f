from __future__ import annotations

import math
import random
from fractions import Fraction

import pytest

from cuboid_packer.demo import random_boxes, random_containers
from cuboid_packer.metrics import axis_copies
from cuboid_packer.models import NO_FIT, Box, GridFit, PackingResult, Rotation, regularised_box
from cuboid_packer.packer import CuboidPacker


def test_count_truncates_each_axis_independently() -> None:
    """count = floor(C.l/o.l) * floor(C.w/o.w) * floor(C.h/o.h)."""
    packer = CuboidPacker()
    container = Box(30, 40, 50)
    assert packer.count(Box(7, 5, 3), container) == 4 * 8 * 16
    assert packer.count(Box(3, 5, 7), container) == 10 * 8 * 7


def test_best_finds_global_maximum_over_orientations() -> None:
    """7x5x3 in 30x40x50: the HWL orientation packs 560, beating LWH's 512."""
    result = CuboidPacker().best(Box(7, 5, 3), Box(30, 40, 50))

    assert result.count == 560
    assert result.rotation is Rotation.HWL
    assert result.rotation_signature == "3x5x7"
    assert result.efficiency == pytest.approx(100 * 560 * 105 / 60000)
    assert result.occupied_block.dimensions == (30.0, 40.0, 49.0)
    assert result.grid == GridFit(nx=10, ny=8, nz=7)
    assert result.fits


def test_regularised_input_gives_same_count() -> None:
    """The packer enumerates orientations itself; input order does not matter."""
    packer = CuboidPacker()
    container = Box(30, 40, 50)
    assert packer.best(regularised_box(3, 7, 5), container).count == packer.best(Box(3, 7, 5), container).count


def test_no_fit_returns_empty_result() -> None:
    """A box larger than the container on every orientation yields the zero result."""
    result = CuboidPacker().best(Box(100, 100, 100), Box(10, 10, 10))

    assert result.count == 0
    assert result.rotation_signature == NO_FIT == "N/A"
    assert result.efficiency == 0
    assert result.occupied_block is None
    assert result.rotation is None
    assert result.grid is None
    assert not result.fits
    assert result == PackingResult.empty()


def test_box_too_long_on_one_axis_only() -> None:
    """One edge longer than every container edge means no orientation fits."""
    result = CuboidPacker().best(Box(12, 1, 1), Box(10, 10, 10))
    assert result.count == 0
    assert result.rotation_signature == "N/A"


def test_tie_break_keeps_first_orientation() -> None:
    """
    3x2x1 in 2x3x6: WLH, WHL and HLW all pack 6 copies.
    The first of them in enumeration order (WLH) wins.
    """
    packer = CuboidPacker()
    box, container = Box(3, 2, 1), Box(2, 3, 6)

    counts = [packer.count(o, container) for o in box.rotations]
    assert counts == [0, 6, 6, 4, 0, 6]

    result = packer.best(box, container)
    assert result.count == 6
    assert result.rotation is Rotation.WLH
    assert result.rotation_signature == "2x3x1"


def test_tie_break_when_all_orientations_tie() -> None:
    """When every orientation ties, the unrotated box is reported."""
    result = CuboidPacker().best(Box(2, 1, 1), Box(2, 2, 2))
    assert result.count == 4
    assert result.rotation is Rotation.LWH
    assert result.rotation_signature == "2x1x1"


def test_cube_packs_with_its_single_rotation() -> None:
    """A cube is evaluated once and reported as unrotated."""
    result = CuboidPacker().best(Box(5, 5, 5), Box(30, 40, 50))
    assert result.count == 6 * 8 * 10
    assert result.rotation is Rotation.LWH
    assert result.rotation_signature == "5x5x5"
    assert result.efficiency == pytest.approx(100.0 * 480 * 125 / 60000)


def test_results_do_not_depend_on_call_order() -> None:
    """best() is pure: repeated and interleaved calls agree."""
    packer = CuboidPacker()
    first = packer.best(Box(7, 5, 3), Box(30, 40, 50))
    packer.best(Box(1, 2, 3), Box(4, 5, 6))
    assert packer.best(Box(7, 5, 3), Box(30, 40, 50)) == first


def test_occupied_block_fits_inside_container() -> None:
    """Occupied block never exceeds the container and matches count * unit volume."""
    rng = random.Random(2024)
    packer = CuboidPacker()
    for container in random_containers(rng, 5):
        for box in random_boxes(rng, 20):
            result = packer.best(box, container)
            if not result.fits:
                continue
            block = result.occupied_block
            assert block.length <= container.length
            assert block.width <= container.width
            assert block.height <= container.height
            assert block.volume == pytest.approx(result.count * box.volume)
            assert 0 < result.efficiency <= 100.0 + 1e-9


def test_best_many_is_container_major() -> None:
    """Pairs are produced for each container in turn, boxes in input order."""
    boxes = [Box(1, 1, 1), Box(2, 2, 2)]
    containers = [Box(4, 4, 4), Box(3, 3, 3)]
    rows = CuboidPacker().best_many(boxes, containers)

    assert [(b.signature, c.signature, r.count) for b, c, r in rows] == [
        ("1x1x1", "4x4x4", 64),
        ("2x2x2", "4x4x4", 8),
        ("1x1x1", "3x3x3", 27),
        ("2x2x2", "3x3x3", 1),
    ]


def test_extreme_edge_ratio_does_not_overflow() -> None:
    """A tiny box in a huge container counts exactly instead of overflowing."""
    box, container = Box(1e-10, 1, 1), Box(1e300, 1, 1)

    result = CuboidPacker().best(box, container)

    assert result.count > 10**300
    assert result.efficiency == pytest.approx(100.0, rel=1e-6)
    assert result.occupied_block.length <= container.length
    assert result.occupied_block.length == pytest.approx(container.length, rel=1e-6)


def test_axis_copies_falls_back_to_exact_division() -> None:
    """Per-axis counts stay integers when the float quotient is infinite."""
    assert axis_copies(30, 7) == 4
    assert axis_copies(1e300, 1e-10) == math.floor(Fraction(1e300) / Fraction(1e-10))


def test_best_handles_extremely_irregular_box() -> None:
    """Squared edge deviations that overflow make the box irregular, not an error."""
    box = Box(1e200, 1e-200, 1)
    assert box.irregularity == math.inf
    assert len(box.rotations) == 6
    assert CuboidPacker().best(box, Box(10, 10, 10)).count == 0
