#!/usr/bin/env python
"""
Rasterize an exported JSON mask into a binary PNG.

Usage:
    python scripts/rasterize_mask.py <mask_json> <output_png> --width 1280 --height 720
"""

import sys
import argparse
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from maskedit.bitmap import bitmap_area, bitmap_bbox, bitmap_to_png, png_to_bitmap
from maskedit.export import parse_json
from maskedit.geometry import is_valid_polygon, polygon_area, rasterize


def main():
    parser = argparse.ArgumentParser(description="Rasterize a JSON mask to a binary PNG")
    parser.add_argument("mask_json", help="Path to the exported mask JSON")
    parser.add_argument("output_png", help="Path of the PNG to write")
    parser.add_argument("--width", type=int, required=True, help="Output width in pixels")
    parser.add_argument("--height", type=int, required=True, help="Output height in pixels")

    args = parser.parse_args()

    print(f"Reading mask: {args.mask_json}")
    print(f"Output size: {args.width}x{args.height}")
    print("-" * 50)

    try:
        polygons = parse_json(Path(args.mask_json).read_text(encoding="utf-8"))
        bitmap = rasterize(polygons, args.width, args.height)
    except (OSError, ValueError) as e:
        print(f"✗ Rasterization failed: {e}")
        sys.exit(1)

    skipped = sum(1 for p in polygons if not is_valid_polygon(p.points))
    vector_area = sum(polygon_area(p.points) for p in polygons)

    Path(args.output_png).write_bytes(bitmap_to_png(bitmap))

    print(f"  Polygons: {len(polygons)}")
    print(f"  Skipped (fewer than 3 points): {skipped}")
    print(f"  Polygon area: {vector_area:.1f}")
    print(f"  Filled pixels: {bitmap_area(bitmap)}")
    print(f"  Filled bbox: {bitmap_bbox(bitmap)}")

    # Verify the written image decodes back to the same bitmap
    print("\nVerifying output...")
    written = png_to_bitmap(Path(args.output_png).read_bytes())
    if written.shape != bitmap.shape or (written != bitmap).any():
        print("✗ Written PNG does not match the rasterized mask")
        sys.exit(1)

    print(f"\n✓ Wrote {args.output_png}")


if __name__ == "__main__":
    main()
