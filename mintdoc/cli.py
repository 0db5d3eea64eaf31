"""Command line entry point for generating Mintlify API documentation."""

import argparse
import logging
from pathlib import Path

from mintdoc.errors import DocumentationError
from mintdoc.run_generation import run_generation

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the generation process."""
    ap = argparse.ArgumentParser(
        description="Generate Mintlify MDX API reference pages from *.api.json files.",
    )
    ap.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="*.api.json files or directories containing them",
    )
    ap.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output folder for the generated pages (default: docs/reference)",
    )
    ap.add_argument(
        "--docs-json",
        type=Path,
        default=None,
        help="Path to the docs.json navigation manifest to update",
    )
    ap.add_argument(
        "--tab-name",
        default=None,
        help="Navigation tab used when docs.json has tabs (default: API Reference)",
    )
    ap.add_argument(
        "--group-name",
        default=None,
        help="Navigation group holding the generated pages (default: API)",
    )
    ap.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--report",
        default=None,
        help="Write a JSON report of the run to this file",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_generation(args)
    except DocumentationError as e:
        logger.error("%s", e.detailed_message())  # noqa: TRY400
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
