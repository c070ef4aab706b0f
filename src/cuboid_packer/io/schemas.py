"""Data schemas for input/output operations."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from cuboid_packer.containers import get_container
from cuboid_packer.models import Box, PackingResult, regularised_box


class DimsSchema(BaseModel):
    """Three edges, given as an object or as a [length, width, height] list."""
    length: float = Field(gt=0, allow_inf_nan=False, description="Length edge")
    width: float = Field(gt=0, allow_inf_nan=False, description="Width edge")
    height: float = Field(gt=0, allow_inf_nan=False, description="Height edge")

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError("dimensions must have exactly three edges")
            length, width, height = data
            return {"length": length, "width": width, "height": height}
        return data

    def to_box(self, regularise: bool = False) -> Box:
        if regularise:
            return regularised_box(self.length, self.width, self.height)
        return Box(self.length, self.width, self.height)


class BestRequestSchema(BaseModel):
    """Schema for a single box/container evaluation."""
    box: DimsSchema
    container: Optional[DimsSchema] = Field(None, description="Explicit container dimensions")
    container_preset: Optional[str] = Field(None, description="Container preset name, e.g. 40HC")
    regularise: bool = Field(False, description="Sort box edges longest first before packing")

    def resolve_container(self) -> Optional[Box]:
        """Explicit dimensions win over a preset; None when neither is given."""
        if self.container is not None:
            return self.container.to_box()
        if self.container_preset:
            return get_container(self.container_preset)
        return None


class BatchRequestSchema(BaseModel):
    """Schema for evaluating every box against every container."""
    boxes: List[DimsSchema] = Field(min_length=1, description="Boxes to pack")
    containers: List[DimsSchema] = Field(default_factory=list, description="Explicit containers")
    container_preset: Optional[str] = Field(None, description="Extra preset container appended to the list")
    regularise: bool = Field(False, description="Sort box edges longest first before packing")

    def resolve_boxes(self) -> list[Box]:
        return [dims.to_box(regularise=self.regularise) for dims in self.boxes]

    def resolve_containers(self) -> list[Box]:
        containers = [dims.to_box() for dims in self.containers]
        if self.container_preset:
            containers.append(get_container(self.container_preset))
        return containers


class PackingResultSchema(BaseModel):
    """Schema for one packing result."""
    box: str = Field(description="Signature of the box as given")
    container: str = Field(description="Signature of the container")
    count: int = Field(ge=0, description="Whole copies that fit")
    rotation_signature: str = Field(description="Winning orientation, or N/A")
    rotation: Optional[str] = Field(None, description="Orientation code, e.g. WLH")
    efficiency: float = Field(ge=0, description="Percent of container volume filled")
    occupied_block: Optional[str] = Field(None, description="Signature of the covered sub-volume")
    grid: Optional[dict[str, int]] = Field(None, description="Copies per axis (nx, ny, nz)")

    @classmethod
    def from_result(cls, box: Box, container: Box, result: PackingResult) -> "PackingResultSchema":
        return cls(
            box=box.signature,
            container=container.signature,
            count=result.count,
            rotation_signature=result.rotation_signature,
            rotation=result.rotation.value if result.rotation else None,
            efficiency=result.efficiency,
            occupied_block=result.occupied_block.signature if result.occupied_block else None,
            grid=result.grid.model_dump() if result.grid else None,
        )
