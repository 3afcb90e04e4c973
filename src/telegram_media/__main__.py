# telegram_media/__main__.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Inspect persisted media records.

    python -m telegram_media dump record.bin
    python -m telegram_media dump record.hex --hex
"""

import argparse
import logging
from pathlib import Path

from telegram_media import config
from telegram_media.coding import decode_root_object
from telegram_media.exceptions import MediaDecodingError
from telegram_media.media_file import TelegramMediaFile

logger = logging.getLogger(__name__)


def describe_media_file(media: TelegramMediaFile) -> list[str]:
    """Return human-readable lines summarizing a media file record."""
    size = "unknown" if media.size is None else f"{media.size} bytes"
    lines = [
        f"file id: namespace={media.file_id.namespace} id={media.file_id.id}",
        f"resource: {media.resource.id}",
        f"mime type: {media.mime_type}",
        f"size: {size}",
        f"previews: {len(media.preview_representations)}",
    ]
    for preview in media.preview_representations:
        width, height = preview.dimensions
        lines.append(f"  - {width}x{height} {preview.resource.id}")
    lines.append(f"attributes: {len(media.attributes)}")
    for attribute in media.attributes:
        lines.append(f"  - {attribute!r}")
    return lines


def _read_payload(path: Path, as_hex: bool) -> bytes:
    if as_hex:
        return bytes.fromhex(path.read_text(encoding="utf-8"))
    return path.read_bytes()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))

    parser = argparse.ArgumentParser(
        prog="telegram_media", description="Inspect persisted media records."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    dump = subparsers.add_parser("dump", help="Decode and print one stored record.")
    dump.add_argument("path", type=Path, help="File holding the encoded record.")
    dump.add_argument(
        "--hex",
        action="store_true",
        help="The file holds hex text instead of raw bytes.",
    )
    args = parser.parse_args(argv)

    try:
        payload = _read_payload(args.path, args.hex)
    except (OSError, ValueError) as e:
        logger.error("Cannot read %s: %s", args.path, e)
        return 1

    try:
        obj = decode_root_object(payload)
    except MediaDecodingError as e:
        logger.error("Cannot decode %s: %s", args.path, e)
        return 1

    if not isinstance(obj, TelegramMediaFile):
        logger.error("%s holds a %s, not a media file", args.path, type(obj).__name__)
        return 1

    for line in describe_media_file(obj):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
