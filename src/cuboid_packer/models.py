from __future__ import annotations

import math
from enum import Enum
from functools import cached_property
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cuboid_packer.errors import InvalidDimensionError

# Boxes whose irregularity falls below this are treated as cubes.
CUBE_TOLERANCE = 1e-6

NO_FIT = "N/A"


class Rotation(str, Enum):
    """
    Axis-aligned orientation codes, declared in evaluation order.

    Each letter names the source edge (L, W or H) that ends up on the
    length, width and height axis respectively.
    """

    LWH = "LWH"
    WLH = "WLH"
    WHL = "WHL"
    HWL = "HWL"
    LHW = "LHW"
    HLW = "HLW"

    @property
    def axes(self) -> tuple[int, int, int]:
        i, j, k = ("LWH".index(letter) for letter in self.value)
        return i, j, k

    def apply(self, box: "Box") -> "Box":
        dims = box.dimensions
        i, j, k = self.axes
        return Box(dims[i], dims[j], dims[k])


class Box(BaseModel):
    """Rectangular solid with three positive edges (unitless)."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0, allow_inf_nan=False, description="Edge along the length axis")
    width: float = Field(gt=0, allow_inf_nan=False, description="Edge along the width axis")
    height: float = Field(gt=0, allow_inf_nan=False, description="Edge along the height axis")

    def __init__(self, length: float, width: float, height: float) -> None:
        try:
            super().__init__(length=length, width=width, height=height)
        except ValidationError as exc:
            raise InvalidDimensionError.from_validation_error(exc) from exc
        # edges near the float limits can still multiply to inf or underflow to 0
        if not (math.isfinite(self.volume) and self.volume > 0):
            raise InvalidDimensionError([("volume", self.volume)])

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> "Box":
        """Copies go through the constructor so derived values match the new edges."""
        dims = {"length": self.length, "width": self.width, "height": self.height}
        dims.update(update or {})
        return Box(**dims)

    def __str__(self) -> str:
        return self.signature

    @property
    def dimensions(self) -> tuple[float, float, float]:
        return self.length, self.width, self.height

    @cached_property
    def signature(self) -> str:
        """Compact description of the edges, e.g. "30x40x50"."""
        return f"{self.length:g}x{self.width:g}x{self.height:g}"

    @cached_property
    def volume(self) -> float:
        return float(self.length * self.width * self.height)

    @cached_property
    def irregularity(self) -> float:
        """
        Sum of squared deviations of the edges from the edge of a cube
        with the same volume. Zero for a perfect cube.
        """
        ideal_edge = self.volume ** (1.0 / 3.0)
        return float(sum((edge - ideal_edge) * (edge - ideal_edge) for edge in self.dimensions))

    @property
    def is_cube(self) -> bool:
        return self.irregularity < CUBE_TOLERANCE

    @cached_property
    def orientations(self) -> tuple[tuple[Rotation, "Box"], ...]:
        """
        (code, oriented box) pairs in evaluation order.

        A cube has a single orientation since every permutation of its
        edges is the same box.
        """
        if self.is_cube:
            return ((Rotation.LWH, Rotation.LWH.apply(self)),)
        return tuple((rotation, rotation.apply(self)) for rotation in Rotation)

    @cached_property
    def rotations(self) -> tuple["Box", ...]:
        return tuple(oriented for _, oriented in self.orientations)


def regularised_box(length: float, width: float, height: float) -> Box:
    """Build a Box whose edges are ordered longest, middle, shortest."""
    box = Box(length, width, height)
    shortest, middle, longest = sorted(box.dimensions)
    return Box(longest, middle, shortest)


class GridFit(BaseModel):
    """Number of copies laid along each container axis."""

    model_config = ConfigDict(frozen=True)

    nx: int = Field(ge=0)
    ny: int = Field(ge=0)
    nz: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.nx * self.ny * self.nz


class PackingResult(BaseModel):
    """Best single-orientation fit of a box inside a container."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0, description="Whole copies that fit")
    rotation_signature: str = Field(default=NO_FIT, description="Signature of the winning orientation")
    efficiency: float = Field(default=0.0, ge=0, description="Percent of container volume filled")
    occupied_block: Optional[Box] = Field(default=None, description="Sub-volume covered by the copies")
    rotation: Optional[Rotation] = Field(default=None, description="Code of the winning orientation")
    grid: Optional[GridFit] = Field(default=None, description="Copies per axis")

    @classmethod
    def empty(cls) -> "PackingResult":
        return cls()

    @property
    def fits(self) -> bool:
        return self.count > 0
