from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Optional, Sequence

from cuboid_packer.config import load_settings
from cuboid_packer.containers import get_container
from cuboid_packer.demo import illustrative_boxes, random_boxes, random_containers, render_report, run_demo
from cuboid_packer.io.schemas import BatchRequestSchema, PackingResultSchema
from cuboid_packer.models import Box, regularised_box
from cuboid_packer.packer import CuboidPacker

logger = logging.getLogger(__name__)


def load_input(path: Path) -> tuple[list[Box], list[Box]]:
    """
    Read a batch file: {"boxes": [...], "containers": [...], "container_preset": "40HC"}.

    Boxes and containers are {"length", "width", "height"} objects or [l, w, h] lists.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    request = BatchRequestSchema.model_validate(data)

    boxes = request.resolve_boxes()
    containers = request.resolve_containers()
    if not containers:
        raise ValueError("Input must include 'containers' or 'container_preset'")

    logger.debug(f"loaded {len(boxes)} boxes and {len(containers)} containers from {path}")
    return boxes, containers


def write_results(results: dict, path: str = "results.json") -> None:
    """
    Write a results dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"writing results to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, sort_keys=True)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuboid-packer",
        description="Best-orientation grid packing estimates for boxes in containers",
    )
    parser.add_argument(
        "--mode",
        choices=["best", "batch", "demo"],
        default="best",
        help="best = one box in one container, batch = every pair from --input, demo = random boxes and containers",
    )
    parser.add_argument("--box", nargs=3, type=float, metavar=("L", "W", "H"), help="Box edges (best mode)")
    parser.add_argument("--container", nargs=3, type=float, metavar=("L", "W", "H"), help="Container edges (best mode)")
    parser.add_argument("--container-preset", help="Container preset name, e.g. 40HC (best mode)")
    parser.add_argument("--regularise", action="store_true", help="Sort box edges longest first (best mode)")
    parser.add_argument("--input", help="Input batch JSON file (batch mode)")
    parser.add_argument("--output", help="Write results JSON to this path")
    parser.add_argument("--seed", type=int, help="Random seed (demo mode)")
    parser.add_argument("--containers", type=positive_int, help="Number of random containers (demo mode)")
    parser.add_argument("--boxes", type=positive_int, help="Number of random boxes (demo mode)")
    parser.add_argument("--log-level", help="Logging level (default from CUBOID_PACKER_LOG_LEVEL)")
    return parser


def _summary_line(box: Box, container: Box, result) -> str:
    occupied = result.occupied_block.signature if result.occupied_block else "none"
    return (
        f"{box} in {container}: Count={result.count}, Efficiency={result.efficiency:.2f}%, "
        f"Rotation={result.rotation_signature}, Occupied={occupied}"
    )


def _run_best(args: argparse.Namespace, parser: argparse.ArgumentParser, packer: CuboidPacker) -> list[dict]:
    if args.box is None:
        parser.error("best mode requires --box L W H")
    if args.container is not None:
        container = Box(*args.container)
    elif args.container_preset:
        container = get_container(args.container_preset)
    else:
        parser.error("best mode requires --container L W H or --container-preset NAME")

    box = regularised_box(*args.box) if args.regularise else Box(*args.box)
    result = packer.best(box, container)
    print(_summary_line(box, container, result))
    return [PackingResultSchema.from_result(box, container, result).model_dump()]


def _run_batch(args: argparse.Namespace, parser: argparse.ArgumentParser, packer: CuboidPacker) -> list[dict]:
    if not args.input:
        parser.error("batch mode requires --input")
    boxes, containers = load_input(Path(args.input))

    rows = []
    for box, container, result in packer.best_many(boxes, containers):
        print(_summary_line(box, container, result))
        rows.append(PackingResultSchema.from_result(box, container, result).model_dump())
    return rows


def _run_demo(args: argparse.Namespace, settings, packer: CuboidPacker) -> list[dict]:
    seed = args.seed if args.seed is not None else settings.seed
    rng = random.Random(seed)
    n_containers = args.containers if args.containers is not None else settings.demo_containers
    n_boxes = args.boxes if args.boxes is not None else settings.demo_boxes

    containers = random_containers(rng, n_containers)
    boxes = illustrative_boxes() + random_boxes(rng, n_boxes)
    logger.info(f"demo seed={seed} containers={len(containers)} boxes={len(boxes)}")

    cases = run_demo(containers, boxes, packer)
    render_report(cases)
    return [
        PackingResultSchema.from_result(case.box, case.container, case.result).model_dump()
        for case in cases
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    packer = CuboidPacker()
    try:
        if args.mode == "best":
            rows = _run_best(args, parser, packer)
        elif args.mode == "batch":
            rows = _run_batch(args, parser, packer)
        else:
            rows = _run_demo(args, settings, packer)
    except (ValueError, OSError) as e:
        # InvalidDimensionError, UnknownContainerPresetError and pydantic ValidationError are ValueErrors
        parser.error(str(e))

    if args.output:
        write_results({"mode": args.mode, "results": rows}, args.output)
        print(f"✅ Results written to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
