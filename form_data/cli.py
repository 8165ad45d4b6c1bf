"""Encode a JSON document as form fields from the command line."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from form_data.logging import get_logger, init_logging
from form_data.services.builder import create
from form_data.services.formatters import FORMATTERS
from form_data.settings import settings
from form_data.utils.files import FormFile
from form_data.utils.flatten import coerce_pairs


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", help="Path to a JSON document, or '-' to read stdin")
    parser.add_argument(
        "--formatter",
        choices=sorted(FORMATTERS),
        default=settings.default_formatter,
        help="Output formatter (default: %(default)s)",
    )
    parser.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Attach a file upload as a top-level field (repeatable)",
    )
    parser.add_argument(
        "--no-quote-plus",
        action="store_true",
        help="Percent-encode spaces as %%20 in url-encoded output",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def _load_source(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with Path(source).expanduser().open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _file_pairs(specs: List[str]) -> List[tuple]:
    pairs = []
    for spec in specs:
        name, sep, path = spec.partition("=")
        if not sep or not name or not path:
            raise ValueError(f"Invalid --file value {spec!r}, expected NAME=PATH")
        pairs.append((name, FormFile(path)))
    return pairs


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    init_logging(level=args.log_level, sink=sys.stderr, enqueue=False)
    log = get_logger().bind(formatter=args.formatter)

    try:
        document = _load_source(args.source)
        uploads = _file_pairs(args.files)
    except (OSError, ValueError) as exc:
        log.error("Input unreadable")
        print(str(exc), file=sys.stderr)
        return 2

    coerced = coerce_pairs(document)
    if not coerced.ok:
        log.error("Input rejected")
        print(str(coerced.error), file=sys.stderr)
        return 2
    root = coerced.value + uploads

    options = {"quote_plus": not args.no_quote_plus}
    payload = create(root, args.formatter, options).unwrap()
    if args.formatter == "url_encoded":
        print(payload.decode("ascii"))
    else:
        _tag, entries = payload
        print(json.dumps(entries, indent=2, default=str))
    log.debug("Encoded form", root_pairs=len(root))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
