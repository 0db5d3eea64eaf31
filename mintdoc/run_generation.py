"""Orchestration logic for generating MDX documentation from API models."""

import argparse
import logging
from pathlib import Path
from typing import Any

from mintdoc.api_resolution_cache import ApiResolutionCache
from mintdoc.compute_config_hash import compute_config_hash
from mintdoc.documenter import Documenter
from mintdoc.errors import ConfigurationError
from mintdoc.generation_report import GenerationReport
from mintdoc.load_api_model import load_api_model
from mintdoc.load_config import load_config
from mintdoc.navigation_manager import NavigationManager
from mintdoc.resource_budget import ResourceBudget, ResourceLimits

logger = logging.getLogger(__name__)

API_JSON_GLOB = "*.api.json"


def find_api_files(inputs: list[Path]) -> list[Path]:
    """Expand input files and directories into a sorted list of API documents."""
    found: set[Path] = set()
    for entry in inputs:
        if entry.is_dir():
            found.update(entry.rglob(API_JSON_GLOB))
        elif entry.is_file():
            found.add(entry)
    return sorted(found)


def run_generation(args: argparse.Namespace) -> int:
    """Execute the full generation pipeline."""
    api_files = find_api_files(args.inputs)
    if not api_files:
        msg = f"No {API_JSON_GLOB} files found under: {', '.join(map(str, args.inputs))}"
        raise SystemExit(msg)

    config = _init_config(args)
    model = load_api_model(api_files)

    out_root = Path(config["output_folder"]).resolve()
    documenter = Documenter(
        model,
        out_root,
        cache=_build_cache(config),
        navigation=_build_navigation(config, out_root),
        budget=_build_budget(config),
    )
    report = GenerationReport(compute_config_hash(config))
    pages = documenter.generate()
    report.add_pages(pages)

    if args.report:
        report.generate_report(args.report, documenter.cache.get_stats())
        logger.info("Report written to %s", args.report)

    print(f"Generated {len(pages)} MDX pages into: {out_root}")
    return 0


def _init_config(args: argparse.Namespace) -> dict[str, Any]:
    """Load configuration and apply command-line overrides."""
    config = load_config(args.config)
    if args.out_dir:
        config["output_folder"] = str(args.out_dir)
    if args.docs_json:
        config["docs_json"] = str(args.docs_json)
    if args.tab_name:
        config["navigation"]["tab_name"] = args.tab_name
    if args.group_name:
        config["navigation"]["group_name"] = args.group_name
    return config


def _build_cache(config: dict[str, Any]) -> ApiResolutionCache:
    section = config.get("cache") or {}
    try:
        return ApiResolutionCache(
            int(section.get("max_size", 500)),
            enabled=bool(section.get("enabled", True)),
        )
    except (TypeError, ValueError) as e:
        msg = "Invalid cache configuration"
        raise ConfigurationError(
            msg, resource="cache", operation="build_cache", cause=e, data=section
        ) from e


def _build_navigation(config: dict[str, Any], out_root: Path) -> NavigationManager:
    section = config.get("navigation") or {}
    docs_json = config.get("docs_json")
    return NavigationManager(
        Path(docs_json).resolve() if docs_json else None,
        out_root,
        tab_name=section.get("tab_name") or "",
        group_name=section.get("group_name") or "",
        enable_menu=bool(section.get("enable_menu", False)),
    )


def _build_budget(config: dict[str, Any]) -> ResourceBudget:
    try:
        limits = ResourceLimits.from_config(config)
    except TypeError as e:
        msg = "Invalid limits configuration"
        raise ConfigurationError(
            msg, resource="limits", operation="build_budget", cause=e
        ) from e
    return ResourceBudget(limits)
