from __future__ import annotations

import argparse
import logging
import os

import matplotlib
matplotlib.use("Agg")
import numpy as np

from pattern import encode, parse, random_parameters
from pattern.logging_utils import configure_logging
from plotting.renderer import RenderConfig, render_thumbnail, render_to_file
from storage import GalleryFullError, GalleryStore


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a layered shape pattern from an artwork string.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--artwork", type=str, help="artwork string (key:value;key:value...)")
    src.add_argument("--artwork-file", type=str, help="file holding an artwork string")
    src.add_argument("--random", action="store_true", help="start from a randomized parameter set")
    p.add_argument("--seed", type=int, default=42, help="seed for --random (default: 42)")
    p.add_argument("--out", type=str, default="plots/artwork.png", help="output image path")
    p.add_argument("--format", type=str, default=None, choices=["png", "jpeg", "jpg"],
                   help="image format (default: from the output extension)")
    p.add_argument("--size", type=int, default=800, help="output width in pixels (default: 800)")
    p.add_argument("--quality", type=int, default=90, help="JPEG quality 1-100 (default: 90)")
    p.add_argument("--thumbnail", type=int, default=None, metavar="PX",
                   help="also write a PX-wide thumbnail next to the output")
    p.add_argument("--fit", action="store_true", help="crop the view to the drawn shapes")
    p.add_argument("--save-to-gallery", type=str, default=None, metavar="PATH",
                   help="store the artwork string in a gallery file")
    p.add_argument("--title", type=str, default=None, help="title used with --save-to-gallery")
    p.add_argument("--print-string", action="store_true", help="print the normalized artwork string")
    p.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return p.parse_args(argv)


def _format_for(path: str, explicit: str | None) -> str:
    if explicit:
        return "jpeg" if explicit == "jpg" else explicit
    ext = os.path.splitext(path)[1].lower()
    return "jpeg" if ext in (".jpg", ".jpeg") else "png"


def main(argv=None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.random:
        params = random_parameters(np.random.default_rng(args.seed))
    elif args.artwork_file:
        with open(args.artwork_file, "r", encoding="utf-8") as f:
            params = parse(f.read().strip())
    else:
        params = parse(args.artwork)

    artwork = encode(params)
    if args.print_string:
        print(artwork)

    config = RenderConfig(
        size=args.size,
        format=_format_for(args.out, args.format),
        quality=args.quality,
        fit=args.fit,
    )
    print(f"Rendering {params.layer_count} layers x {params.primitive_count} {params.shape_kind.value} -> {args.out}")
    render_to_file(params, args.out, config)

    if args.thumbnail:
        root, _ = os.path.splitext(args.out)
        thumb_path = f"{root}_thumb.png"
        render_thumbnail(params, size=args.thumbnail).save(thumb_path)
        print(f"Thumbnail -> {thumb_path}")

    if args.save_to_gallery:
        store = GalleryStore(args.save_to_gallery)
        try:
            record = store.save(artwork, title=args.title)
        except GalleryFullError as e:
            print(e)
            for r in e.existing:
                print(f"  {r.piece_id}  {r.timestamp:%Y-%m-%d %H:%M}  {r.title or ''}")
            raise SystemExit(1)
        print(f"Saved to gallery as {record.piece_id}")


if __name__ == "__main__":
    main()
