# scripts/render_part.py
"""Render a file (or stdin) as an encoded text/* MIME part."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

# settings are read when email_parts.config is first imported
load_dotenv()

from email_parts import config  # noqa: E402
from email_parts.tool import (  # noqa: E402
    build_text_part,
    list_encodings,
    part_to_raw_payload,
    summarize_part,
    write_part,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render text as an encoded MIME part.")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File to use as the part body (use '-' for stdin; default: %(default)s).",
    )
    parser.add_argument(
        "--output",
        "-o",
        default="-",
        help="Where to write the rendered part (use '-' for stdout; default: %(default)s).",
    )
    parser.add_argument(
        "--encoding",
        "-e",
        default="quoted-printable",
        help="Content-Transfer-Encoding to apply (default: %(default)s).",
    )
    parser.add_argument("--charset", help="Charset parameter for Content-Type.")
    parser.add_argument(
        "--subtype",
        default="plain",
        help="Media subtype, e.g. plain or html (default: %(default)s).",
    )
    parser.add_argument("--disposition", help="Optional Content-Disposition, e.g. inline.")
    parser.add_argument("--name", help="Optional name parameter for the part.")
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra header to emit with the part (repeatable).",
    )
    parser.add_argument(
        "--format",
        choices=["mime", "raw", "summary"],
        default="mime",
        help="mime: headers and body; raw: JSON {\"raw\": base64url}; summary: JSON overview.",
    )
    parser.add_argument(
        "--no-stream",
        action="store_true",
        help="Render the whole body in memory instead of streaming it chunk by chunk.",
    )
    parser.add_argument(
        "--list-encodings",
        action="store_true",
        help="List the registered content encodings and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    argp = build_parser()
    args = argp.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.list_encodings:
        for name in list_encodings():
            print(name)
        return 0

    try:
        part = build_text_part(
            args.input,
            charset=args.charset,
            subtype=args.subtype,
            encoding=args.encoding,
            disposition=args.disposition,
            name=args.name,
            headers=args.header,
        )
    except ValueError as exc:
        argp.error(str(exc))

    if args.format == "summary":
        payload = json.dumps(summarize_part(part), indent=2)
    elif args.format == "raw":
        payload = json.dumps(part_to_raw_payload(part))
    else:
        payload = None

    if args.output == "-":
        if payload is not None:
            print(payload)
        else:
            write_part(part, sys.stdout.buffer, stream=not args.no_stream)
            sys.stdout.flush()
        return 0

    out_path = Path(args.output)
    if payload is not None:
        out_path.write_text(payload)
    else:
        with out_path.open("wb") as fh:
            written = write_part(part, fh, stream=not args.no_stream)
        logging.getLogger(__name__).info("Wrote %d bytes to %s", written, out_path)
    print(f"Saved {args.format} output to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
