"""Demo driver: random containers and boxes evaluated pairwise, rendered as text."""

from __future__ import annotations

import random
import sys
from typing import Iterable, Optional, TextIO

from pydantic import BaseModel, ConfigDict

from cuboid_packer.models import Box, PackingResult, regularised_box
from cuboid_packer.packer import CuboidPacker

CONTAINER_EDGE_RANGES = ((40, 80), (50, 100), (60, 120))
BOX_EDGE_RANGE = (1, 30)


class DemoCase(BaseModel):
    model_config = ConfigDict(frozen=True)

    container_index: int
    box_index: int
    container: Box
    box: Box
    result: PackingResult


def random_containers(rng: random.Random, n: int) -> list[Box]:
    return [
        Box(*(rng.randint(low, high) for low, high in CONTAINER_EDGE_RANGES))
        for _ in range(n)
    ]


def random_boxes(rng: random.Random, n: int) -> list[Box]:
    low, high = BOX_EDGE_RANGE
    return [
        regularised_box(rng.randint(low, high), rng.randint(low, high), rng.randint(low, high))
        for _ in range(n)
    ]


def illustrative_boxes() -> list[Box]:
    """A plain box and a cube, useful as fixed reference cases."""
    return [regularised_box(7, 5, 3), Box(5, 5, 5)]


def run_demo(
    containers: Iterable[Box],
    boxes: Iterable[Box],
    packer: Optional[CuboidPacker] = None,
) -> list[DemoCase]:
    packer = packer or CuboidPacker()
    boxes = list(boxes)
    return [
        DemoCase(
            container_index=i,
            box_index=j,
            container=container,
            box=box,
            result=packer.best(box, container),
        )
        for i, container in enumerate(containers)
        for j, box in enumerate(boxes)
    ]


def _describe(box: Box) -> str:
    return f"{box} [Volume: {box.volume:g}, Irregularity: {box.irregularity:.4f}]"


def render_report(cases: Iterable[DemoCase], stream: Optional[TextIO] = None) -> None:
    """Write one header per container followed by one line per box."""
    stream = stream or sys.stdout
    current = None
    for case in cases:
        if case.container_index != current:
            current = case.container_index
            stream.write(f"Container: {_describe(case.container)}\n")
        result = case.result
        occupied = result.occupied_block.signature if result.occupied_block else "none"
        stream.write(
            f"  Test {case.box_index}: {_describe(case.box)} "
            f"Count: {result.count}, Efficiency: {result.efficiency:.2f}% "
            f"[rotated as {result.rotation_signature}, occupies {occupied}]\n"
        )
