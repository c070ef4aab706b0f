from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from cuboid_packer.config import load_settings
from cuboid_packer.containers import CONTAINER_PRESETS_M
from cuboid_packer.errors import UnknownContainerPresetError
from cuboid_packer.io.schemas import BatchRequestSchema, BestRequestSchema, PackingResultSchema
from cuboid_packer.packer import CuboidPacker

logger = logging.getLogger(__name__)

settings = load_settings()
packer = CuboidPacker()

# FastAPI app instance (exactly one)
app = FastAPI(
    title="Cuboid Packer API",
    description="Best-orientation grid packing estimates for a box in a container",
)

if settings.cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )


def error_response(error: str, summary: str, details: list[str]) -> Response:
    """Friendly 422 body: {"error", "summary", "details"}."""
    return Response(
        content=json.dumps({"error": error, "summary": summary, "details": details}),
        status_code=422,
        media_type="application/json",
    )


@app.post("/best")
async def best(request: BestRequestSchema) -> Any:
    """
    Best orientation of one box in one container.

    Input (request body):
        {
            "box": {"length": 7, "width": 5, "height": 3},
            "container": {"length": 30, "width": 40, "height": 50}
        }
    "container_preset": "40HC" may replace "container".
    """
    try:
        container = request.resolve_container()
        if container is None:
            return error_response(
                "MISSING_INFORMATION",
                "Please provide container dimensions or a container preset.",
                ["Container size (length, width, height) or container_preset"],
            )
        box = request.box.to_box(regularise=request.regularise)

        result = packer.best(box, container)
        logger.info(f"best box={box} container={container} count={result.count} rotation={result.rotation_signature}")
        return PackingResultSchema.from_result(box, container, result).model_dump()

    except UnknownContainerPresetError as e:
        return error_response("UNKNOWN_PRESET", str(e), [f"Valid presets: {', '.join(e.valid)}"])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /best endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/batch")
async def batch(request: BatchRequestSchema) -> Any:
    """Evaluate every box against every container, container-major."""
    try:
        containers = request.resolve_containers()
        if not containers:
            return error_response(
                "MISSING_INFORMATION",
                "Please provide at least one container or a container preset.",
                ["Containers"],
            )
        boxes = request.resolve_boxes()

        results = [
            PackingResultSchema.from_result(box, container, result).model_dump()
            for box, container, result in packer.best_many(boxes, containers)
        ]
        logger.info(f"batch boxes={len(boxes)} containers={len(containers)} results={len(results)}")
        return {"results": results}

    except UnknownContainerPresetError as e:
        return error_response("UNKNOWN_PRESET", str(e), [f"Valid presets: {', '.join(e.valid)}"])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /batch endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/presets")
async def presets() -> dict[str, Any]:
    """Container presets (meters)."""
    return {"presets": CONTAINER_PRESETS_M}


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
