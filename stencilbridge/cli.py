import argparse
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

from .engine import SKIPPED, apply_auto_bridges
from .imaging import load_image, mask_from_rgba, mask_to_rgba, save_rgba, threshold
from .layout import PAPER_MM, clamp_dpi, compose_on_paper, paper_pixels
from .report import blend_overlay, count_floating_regions

MIN_BRIDGE_WIDTH = 2
MIN_ISLAND_AREA = 10


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Turn an image into a printable stencil, adding bridges so no island of material falls out."
    )
    parser.add_argument("input", type=Path, help="Input image (PNG, BMP, JPEG, etc.)")
    parser.add_argument("--outdir", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--paper", choices=sorted(PAPER_MM) + ["native"], default="a4",
                        help="Paper format, or 'native' to keep the image's own pixel size")
    parser.add_argument("--orientation", choices=["portrait", "landscape"], default="portrait", help="Paper orientation")
    parser.add_argument("--dpi", type=int, default=300, help="Print resolution (clamped to 72-600)")
    parser.add_argument("--threshold", type=int, default=128, help="Threshold for binarization (0-255)")
    parser.add_argument("--blur", type=float, default=0.0, help="Gaussian blur radius applied before thresholding")
    parser.add_argument("--invert", action="store_true", help="Cut the light areas instead of the dark ones")
    parser.add_argument("--no-bridges", action="store_true", help="Disable automatic bridges")
    parser.add_argument("--bridge-width", type=int, default=14, help="Bridge width in pixels (min 2)")
    parser.add_argument("--min-island-area", type=int, default=250,
                        help="Minimum island area in pixels (min 10, smaller islands ignored)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log", nargs='?', const="log.txt", default=None, metavar="FILE",
                        help="Save console output to file (default: log.txt)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    handlers: list = [logging.StreamHandler()]
    if args.log:
        args.outdir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(args.outdir / args.log, mode='w'))
    logging.basicConfig(level=log_level, format="[%(levelname)s] %(message)s", handlers=handlers)

    if not 0 <= args.threshold <= 255:
        raise SystemExit("--threshold must be between 0 and 255")
    if args.blur < 0:
        raise SystemExit("--blur must be >= 0")
    if not args.input.is_file():
        raise SystemExit(f"Input image not found: {args.input}")
    bridge_width = max(MIN_BRIDGE_WIDTH, args.bridge_width)
    min_area = max(MIN_ISLAND_AREA, args.min_island_area)

    logging.info("Loading input image: %s", args.input)
    image = load_image(args.input)
    if args.paper == "native":
        width, height = image.size
    else:
        dpi = clamp_dpi(args.dpi)
        width, height = paper_pixels(args.paper, dpi, args.orientation)
        logging.info("Laying out on %s %s at %d dpi (%dx%d px)", args.paper, args.orientation, dpi, width, height)

    gray = compose_on_paper(image, width, height, blur=args.blur)
    rgba = threshold(gray, args.threshold, invert=args.invert)
    mask = mask_from_rgba(rgba)
    before = mask.copy()

    bridge_count = 0
    if not args.no_bridges:
        bridge_count = apply_auto_bridges(mask, bridge_width=bridge_width, min_area=min_area, progress=True)
        if bridge_count == SKIPPED:
            logging.warning("Image too large: automatic bridges skipped. Lower the DPI to enable them.")
        else:
            rgba = mask_to_rgba(mask)
            remaining = count_floating_regions(mask)
            if remaining:
                logging.warning("%d floating island(s) remain (below %d px or past the bridge cap)", remaining, min_area)

    args.outdir.mkdir(parents=True, exist_ok=True)
    stencil_path = args.outdir / "stencil.png"
    save_rgba(stencil_path, rgba)
    logging.info("Wrote %s (%dx%d px)", stencil_path, width, height)

    if bridge_count > 0:
        added = mask & ~before
        bridges_path = args.outdir / "bridges.png"
        save_rgba(bridges_path, blend_overlay(rgba, added, (0, 0, 255)))  # Blue for bridges
        logging.info("Wrote %s (blue = %d bridge(s), %d px)", bridges_path, bridge_count, int(np.sum(added)))

    logging.info("Done. Bridges added: %d", max(0, bridge_count))


if __name__ == "__main__":
    main()
