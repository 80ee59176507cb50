"""Command line interface for resolving manuscript bibliographies."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List

from .app import ReferenceResolverApp, ResolutionResult
from .nodes import BibliographyItem
from .report import render_report

logger = logging.getLogger(__name__)


def _serialize_item(item: BibliographyItem) -> Dict[str, Any]:
    reference = item.reference
    return {
        "anchor": item.anchor,
        "type": item.type.value,
        "reference": asdict(reference) if reference is not None else None,
        "raw": item.reference_group,
    }


def _build_result(result: ResolutionResult) -> Dict[str, Any]:
    def group(bib) -> List[Dict[str, Any]]:
        if bib is None:
            return []
        return [_serialize_item(i) for i in bib.children if isinstance(i, BibliographyItem)]

    return {
        "injected": result.injected,
        "normative": group(result.normative),
        "informative": group(result.informative),
    }


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve citations into a bibliography placed in the back matter"
    )
    parser.add_argument("input", help="Path to an mmark-style manuscript")
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write the resolved bibliography as JSON",
    )
    parser.add_argument(
        "--title-xml",
        type=Path,
        help="Write the title block rendered as RFC 7991 XML",
    )
    parser.add_argument(
        "--no-reformat",
        action="store_true",
        help="Keep inline <reference> blocks exactly as written",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose, args.quiet)

    resolver = ReferenceResolverApp(reformat_references=not args.no_reformat)
    try:
        result = resolver.process_file(Path(args.input))
    except (OSError, ValueError) as exc:
        logger.error("Cannot process %s: %s", args.input, exc)
        return 1

    print(render_report(result))

    if args.json_output:
        args.json_output.write_text(json.dumps(_build_result(result), indent=2))

    if args.title_xml:
        args.title_xml.write_text(result.title_xml)

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
