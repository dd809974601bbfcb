#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from algimg.config import ServiceConfig
from algimg.image_proxy import ImageFetchError
from algimg.logging_config import setup_logging
from algimg.models import IMAGE_SIZES, PUZZLE_ORDERS, RenderOptions, Stage, TopColor
from algimg.service import AlgImageService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download VisualCube images for a batch of algorithms")
    parser.add_argument("input", nargs="?", help="Text file with one algorithm per line (default: stdin)")
    parser.add_argument("--out", default=".", help="Directory for alg.png / alg-imgs.zip")
    parser.add_argument("--pzl", type=int, default=3, choices=PUZZLE_ORDERS, help="Puzzle order")
    parser.add_argument("--size", type=int, default=128, choices=IMAGE_SIZES, help="Image size in pixels")
    parser.add_argument(
        "--stage",
        default=Stage.LL.value,
        choices=[stage.value for stage in Stage if stage is not Stage.NONE] + ["none"],
        help="Stage mask, or 'none'",
    )
    parser.add_argument(
        "--top-color",
        default=TopColor.YELLOW.value,
        choices=[color.value for color in TopColor],
        help="Color on the U face",
    )
    parser.add_argument("--inverse", action="store_true", help="Show the state the algorithm produces")
    parser.add_argument("--mirror", action="store_true", help="Mirror algorithms left-to-right")
    parser.add_argument("--no-view", action="store_true", help="Isometric view instead of plan view")
    parser.add_argument("--workers", type=int, default=None, help="Concurrent downloads")
    parser.add_argument("--urls-only", action="store_true", help="Print image URLs as JSON and exit")
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")
    return args


def build_options(args: argparse.Namespace) -> RenderOptions:
    return RenderOptions(
        pzl=args.pzl,
        view=not args.no_view,
        stage=Stage.NONE if args.stage == "none" else Stage(args.stage),
        size=args.size,
        inverse=args.inverse,
        mirror=args.mirror,
        top_color=TopColor(args.top_color),
    )


def _read_input(path: str | None) -> str:
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run(service: AlgImageService, args: argparse.Namespace) -> int:
    algs = service.sanitize(_read_input(args.input))
    if not algs:
        print("No valid algorithms found")
        return 1

    for alg in algs:
        print(alg)

    images = service.generate(algs, build_options(args))
    if args.urls_only:
        print(json.dumps([image.to_dict() for image in images], indent=2))
        return 0

    try:
        artifact = service.package(images)
    except ImageFetchError as exc:
        print(f"Download failed: {exc}")
        return 1

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / artifact.filename
    target.write_bytes(artifact.content)
    print(f"Saved {len(artifact.entries)}/{len(images)} images -> {target}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = ServiceConfig.from_env()
    if args.workers is not None:
        config = replace(config, max_workers=args.workers)
    setup_logging(config.log_level)

    service = AlgImageService.create(config=config)
    try:
        return run(service=service, args=args)
    finally:
        service.close()


if __name__ == "__main__":
    raise SystemExit(main())
