#!/usr/bin/env python3
# backend/scripts/generate_variants.py
"""
Generate CDN variants for local image files.

Runs the same pipeline the upload endpoint uses, writes every variant next to
each other in an output directory and prints the EXIF summary. Handy for
checking output sizes or regenerating a few formats by hand.

Usage:
    python scripts/generate_variants.py IMG_0036.jpeg --output ./variants
    python scripts/generate_variants.py *.HEIC --formats webp avif --widths 800
    python scripts/generate_variants.py IMG_0036.jpeg --exif-only
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from photo_cdn.config import settings
from photo_cdn.enums import ImageFormat, LogEmoji, LoggerName, LogSource
from photo_cdn.exceptions import PhotoCdnError
from photo_cdn.services.logger import configure_logging, get_service_logger
from photo_cdn.services.variant_pipeline import (
    VariantGenerator,
    extract_exif_data,
    get_variant_configs,
)
from photo_cdn.utils import sanitize_filename

logger = get_service_logger(LoggerName.SCRIPT, LogSource.SCRIPT)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate photo CDN variants")
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files to process")
    parser.add_argument(
        "--output", type=Path, default=Path("variants"), help="Output directory"
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        choices=[image_format.value for image_format in ImageFormat],
        help="Only generate these formats",
    )
    parser.add_argument(
        "--widths", nargs="+", type=int, help="Only generate these widths"
    )
    parser.add_argument(
        "--exif-only", action="store_true", help="Print EXIF summary and exit"
    )
    return parser.parse_args(argv)


def build_filter(formats: Optional[List[str]], widths: Optional[List[int]]):
    if not formats and not widths:
        return None

    def _filter(config) -> bool:
        if formats and config.format.value not in formats:
            return False
        if widths and config.width not in widths:
            return False
        return True

    return _filter


async def process_file(
    path: Path, output_dir: Path, generator: VariantGenerator, args: argparse.Namespace
) -> bool:
    buffer = path.read_bytes()
    print(f"{path.name}: {len(buffer) / 1024:.1f} KB")

    exif = extract_exif_data(buffer)
    print(f"  EXIF: {exif.model_dump(by_alias=True)}")
    if args.exif_only:
        return True

    try:
        variants = await generator.generate_variants(
            buffer,
            sanitize_filename(path.name),
            filter=build_filter(args.formats, args.widths),
        )
    except PhotoCdnError as e:
        logger.error(f"Failed to process {path}", exception=e)
        return False

    for variant in variants:
        (output_dir / variant.filename).write_bytes(variant.buffer)
        print(f"  - {variant.filename}: {variant.size / 1024:.1f} KB")
    return True


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.log_level, settings.log_file)

    if not args.exif_only:
        args.output.mkdir(parents=True, exist_ok=True)
        planned = get_variant_configs(build_filter(args.formats, args.widths))
        logger.info(
            f"Generating {len(planned)} variant(s) per image into {args.output}",
            emoji=LogEmoji.STARTUP,
        )

    generator = VariantGenerator()
    failed = 0
    for path in args.inputs:
        if not path.is_file():
            logger.warning(f"Skipping missing file: {path}")
            failed += 1
            continue
        if not await process_file(path, args.output, generator, args):
            failed += 1

    if failed:
        print(f"❌ {failed} file(s) failed")
        return 1
    print("✅ Done")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
