#!/usr/bin/env python3
"""
pixelrect command line.

Usage:
    pixelrect render sprite.px -o sprite.svg
    pixelrect render sprite.px --fragment
    pixelrect inspect sprite.px
    pixelrect validate sprite.px
    pixelrect encode sprite.png -o sprite.px --background

Exit codes:
    0  success
    1  invalid payload / encode failure
    2  usage or configuration error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image, UnidentifiedImageError

from pixelrect import api
from pixelrect.configs.loader import PixelRectConfig, load_config
from pixelrect.errors import ConfigError, EncodeError, FormatError
from pixelrect.format.encoder import encode_image
from pixelrect.render.renderer import effective_scale
from pixelrect.render.scanner import iter_runs
from pixelrect.utils import fs, hashing
from pixelrect.utils.logging_config import push_context, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixelrect",
        description="Convert compact pixel art payloads to SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path (defaults to the shipped defaults.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override logging.level from the config",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also log to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a payload as SVG")
    render.add_argument("input", type=Path, help="Payload file")
    render.add_argument("--output", "-o", type=Path, help="SVG file (stdout if omitted)")
    render.add_argument(
        "--fragment",
        action="store_true",
        help="Emit rects only, without the <svg> wrapper",
    )
    render.add_argument(
        "--unsafe",
        action="store_true",
        help="Skip validation (payload must already be known-good)",
    )

    inspect = sub.add_parser("inspect", help="Print header, palette and rect count")
    inspect.add_argument("input", type=Path, help="Payload file")

    validate = sub.add_parser("validate", help="Exit 0 if the payload is valid")
    validate.add_argument("input", type=Path, help="Payload file")

    encode = sub.add_parser("encode", help="Convert an image to a payload")
    encode.add_argument("input", type=Path, help="Image file (PNG, GIF, ...)")
    encode.add_argument("--output", "-o", type=Path, required=True, help="Payload file")
    encode.add_argument("--scale", type=int, default=0, help="Header scale, 0 for auto")
    encode.add_argument(
        "--background",
        action="store_true",
        help="Paint the most frequent color as background",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as exc:
        print(f"pixelrect: {exc}", file=sys.stderr)
        return 2

    log_cfg = cfg.logging
    setup_logging(
        args.log_level or log_cfg.level,
        args.log_file or log_cfg.file,
        json=args.json_logs or log_cfg.json_format,
        color=log_cfg.color,
        rotate=log_cfg.rotate.model_dump() if log_cfg.rotate else None,
        context={"cmd": args.command},
    )
    push_context(input=args.input.name)

    handlers = {
        "render": _cmd_render,
        "inspect": _cmd_inspect,
        "validate": _cmd_validate,
        "encode": _cmd_encode,
    }
    try:
        return handlers[args.command](args, cfg)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 2
    except (FormatError, EncodeError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_render(args: argparse.Namespace, cfg: PixelRectConfig) -> int:
    data = fs.read_bytes(args.input)
    validate = cfg.render.validate_input and not args.unsafe
    if args.fragment:
        svg = api.render_fragment(data, validate)
    else:
        svg = api.render_document(
            data, validate, auto_scale_target=cfg.render.auto_scale_target
        )

    if args.output is None:
        sys.stdout.write(svg + "\n")
        return 0

    if cfg.output.atomic_write:
        fs.atomic_write_text(args.output, svg)
    else:
        fs.ensure_dir(args.output.parent)
        args.output.write_text(svg, encoding="utf-8")
    logger.info(
        "Wrote %s (%d bytes) from payload sha256=%s",
        args.output, len(svg), hashing.short_digest(hashing.sha256_bytes(data)),
    )
    return 0


def _cmd_inspect(args: argparse.Namespace, cfg: PixelRectConfig) -> int:
    data = fs.read_bytes(args.input)
    ctx = api.decode(data)
    header = ctx.header
    rects = sum(1 for _ in iter_runs(ctx))

    lines = [
        f"file:        {args.input}",
        f"sha256:      {hashing.sha256_bytes(data)}",
        f"bytes:       {len(data)}",
        f"size:        {header.width}x{header.height} ({header.total_pixels} pixels)",
        f"scale:       {header.scale} (effective "
        f"{effective_scale(header, cfg.render.auto_scale_target)})",
        f"colors:      {header.num_colors} ({header.bits_per_pixel} bits/pixel"
        f"{', alpha' if header.has_alpha else ''})",
        "background:  "
        + (f"#{ctx.palette[header.background_color_index]}" if header.has_background else "none"),
        f"rects:       {rects}",
        "palette:     " + " ".join(f"#{token}" for token in ctx.palette),
    ]
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


def _cmd_validate(args: argparse.Namespace, cfg: PixelRectConfig) -> int:
    data = fs.read_bytes(args.input)
    try:
        api.decode(data)
    except FormatError as exc:
        logger.error("%s is invalid: %s: %s", args.input, type(exc).__name__, exc)
        return 1
    logger.info("%s is valid", args.input)
    return 0


def _cmd_encode(args: argparse.Namespace, cfg: PixelRectConfig) -> int:
    if not args.input.is_file():
        raise FileNotFoundError(f"Input file not found: {args.input}")
    try:
        with Image.open(args.input) as image:
            payload = encode_image(image, scale=args.scale, background=args.background)
    except UnidentifiedImageError as exc:
        raise EncodeError(f"Cannot read image {args.input}: {exc}") from exc

    fs.atomic_write_bytes(args.output, payload)
    logger.info("Wrote %s (%d bytes)", args.output, len(payload))
    return 0


if __name__ == "__main__":
    sys.exit(main())
