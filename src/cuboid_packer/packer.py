"""Orientation search for the grid-tiling packing estimate."""

from __future__ import annotations

import logging
from typing import Iterable

from cuboid_packer.metrics import compute_efficiency, grid_fit, occupied_block
from cuboid_packer.models import Box, PackingResult

logger = logging.getLogger(__name__)


class CuboidPacker:
    """
    Finds the orientation of a box that fits the most whole copies into a
    container when that orientation is repeated on a uniform grid.

    This is an estimate, not a 3D bin packer: a single orientation is used for
    every copy and leftover space along an axis is never reused.
    """

    def count(self, orientation: Box, container: Box) -> int:
        """Copies of ``orientation`` that fit in ``container`` (truncating per axis)."""
        return grid_fit(orientation, container).total

    def best(self, box: Box, container: Box) -> PackingResult:
        """
        Evaluate every orientation of ``box`` against ``container``.

        Orientations are scanned in the fixed order of ``Box.orientations``
        and only a strictly greater count replaces the current best, so the
        first orientation reaching the maximum wins ties.

        Returns:
            PackingResult with count, winning rotation signature, efficiency
            (percent of container volume) and occupied block. When no
            orientation fits, the empty result (count 0, "N/A").
        """
        best_count = 0
        best_rotation = None
        best_orientation = None
        best_grid = None

        for rotation, orientation in box.orientations:
            grid = grid_fit(orientation, container)
            count = grid.total
            logger.debug(
                f"{box} as {rotation.value} ({orientation}) in {container}: "
                f"{grid.nx}x{grid.ny}x{grid.nz}={count}"
            )
            if count > best_count:
                best_count = count
                best_rotation = rotation
                best_orientation = orientation
                best_grid = grid

        if best_orientation is None:
            logger.debug(f"{box} does not fit in {container}")
            return PackingResult.empty()

        result = PackingResult(
            count=best_count,
            rotation_signature=best_orientation.signature,
            efficiency=compute_efficiency(best_count, best_orientation.volume, container.volume),
            occupied_block=occupied_block(best_orientation, best_grid),
            rotation=best_rotation,
            grid=best_grid,
        )
        logger.debug(f"best for {box} in {container}: {result.count} as {result.rotation_signature}")
        return result

    def best_many(
        self,
        boxes: Iterable[Box],
        containers: Iterable[Box],
    ) -> list[tuple[Box, Box, PackingResult]]:
        """Run ``best`` for every (container, box) pair, container-major."""
        boxes = list(boxes)
        return [
            (box, container, self.best(box, container))
            for container in containers
            for box in boxes
        ]
