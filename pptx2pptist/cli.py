from __future__ import annotations

import argparse
import dataclasses
import io
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import pptx2pptist
from pptx2pptist.config import Settings
from pptx2pptist.exceptions import ConversionError
from pptx2pptist.serialization import serialize_presentation


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptx2pptist",
        description="Convert a PowerPoint .pptx file to PPTist JSON.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the .pptx file to convert.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the JSON to this file instead of stdout.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON with this indentation.",
    )
    parser.add_argument(
        "--no-media",
        action="store_true",
        help="Omit base64 media payloads (content types are still listed).",
    )
    parser.add_argument(
        "--intermediate",
        action="store_true",
        help="Emit the parsed intermediate model instead of PPTist JSON.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    try:
        settings = Settings.from_env()
        if args.no_media:
            settings = dataclasses.replace(settings, include_media=False)
    except ValueError as exc:
        print(f"pptx2pptist: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(
        level=settings.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        data = io.BytesIO(args.path.read_bytes())
        if args.intermediate:
            presentation = pptx2pptist.read_pptx(data, str(args.path))
            payload = serialize_presentation(
                presentation, include_binary=settings.include_media
            )
        else:
            payload = pptx2pptist.convert_pptx(data, str(args.path), settings)
    except (ConversionError, OSError) as exc:
        code = getattr(exc, "code", "IO_ERROR")
        print(f"pptx2pptist: {code}: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(payload, indent=args.indent)
    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
