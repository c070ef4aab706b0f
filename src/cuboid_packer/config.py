"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "CUBOID_PACKER_"


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Root log level for the CLI and API")
    seed: Optional[int] = Field(default=None, description="Demo random seed (None = nondeterministic)")
    demo_containers: int = Field(default=10, gt=0, description="Containers generated by the demo")
    demo_boxes: int = Field(default=100, gt=0, description="Boxes generated by the demo")
    cors_origin_regex: Optional[str] = Field(default=None, description="Allowed CORS origins for the API")


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str) -> Optional[int]:
    value = _env(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX + name} must be an integer, got {value!r}") from None


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build Settings from CUBOID_PACKER_* environment variables.

    A .env file is loaded first when present; it never overrides variables
    already set in the environment.
    """
    if dotenv:
        load_dotenv()

    values = {
        "log_level": _env("LOG_LEVEL"),
        "seed": _env_int("SEED"),
        "demo_containers": _env_int("DEMO_CONTAINERS"),
        "demo_boxes": _env_int("DEMO_BOXES"),
        "cors_origin_regex": _env("CORS_ORIGIN_REGEX"),
    }
    settings = Settings(**{key: value for key, value in values.items() if value is not None})
    return settings.model_copy(update={"log_level": settings.log_level.upper()})
