"""Exceptions raised by the cuboid packer."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class InvalidDimensionError(ValueError):
    """Raised when a box is built with an edge that is not a positive, finite number."""

    def __init__(self, errors: list[tuple[str, Any]]):
        self.errors = errors
        details = ", ".join(f"{axis}={value!r}" for axis, value in errors)
        super().__init__(f"Box edges must be positive finite numbers with a finite, non-zero volume (got {details})")

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidDimensionError":
        errors = []
        for err in exc.errors():
            axis = str(err["loc"][0]) if err.get("loc") else "?"
            errors.append((axis, err.get("input")))
        return cls(errors)


class UnknownContainerPresetError(ValueError):
    """Raised for a container preset name that is not in the preset table."""

    def __init__(self, preset: str, valid: list[str]):
        self.preset = preset
        self.valid = valid
        super().__init__(f"Unknown container_preset '{preset}'. Valid: {valid}")
