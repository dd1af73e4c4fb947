from __future__ import annotations

import argparse
import logging

import matplotlib
matplotlib.use("Agg")

from pattern import parse
from pattern.logging_utils import configure_logging
from plotting.renderer import render_gallery_grid
from storage import GalleryStore


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render every stored artwork into one grid image.")
    p.add_argument("--gallery", type=str, default="gallery.json", help="gallery file (default: gallery.json)")
    p.add_argument("--device", type=str, default=None, help="device id to list (default: this machine)")
    p.add_argument("--out", type=str, default="plots/gallery.png", help="output image path")
    p.add_argument("--cols", type=int, default=4, help="columns in the grid")
    p.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    store = GalleryStore(args.gallery, device_id=args.device)
    records = store.list()
    if not records:
        print(f"No artworks stored in {args.gallery}")
        return
    artworks = [parse(r.artwork_string) for r in records]
    titles = [r.title or r.timestamp.strftime("%Y-%m-%d %H:%M") for r in records]
    print(f"Rendering {len(records)} artworks -> {args.out}")
    render_gallery_grid(artworks, out_path=args.out, titles=titles, cols=args.cols)
    print("Done.")


if __name__ == "__main__":
    main()
