"""Logic for generating reports on a documentation run."""

import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any

from mintdoc.api_resolution_cache import CacheStats
from mintdoc.page_descriptor import PageDescriptor


class GenerationReport:
    """Collects and summarizes the pages written by one run."""

    def __init__(self, config_hash: str) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.pages: list[PageDescriptor] = []
        self.start_time = time.time()

    def add_pages(self, pages: list[PageDescriptor]) -> None:
        """Add the written pages to the report."""
        self.pages.extend(pages)

    def generate_report(self, path: str | Path, cache_stats: CacheStats | None = None) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "total_pages": len(self.pages),
            },
            "pages": [
                {
                    "path": p.output_path,
                    "title": p.title,
                    "size": p.size,
                    "parent": p.parent_path,
                }
                for p in self.pages
            ],
            "stats": self._compute_stats(),
            "cache": asdict(cache_stats) if cache_stats is not None else None,
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        folder_counts: dict[str, int] = {}
        total_bytes = 0
        largest_page: PageDescriptor | None = None

        for p in self.pages:
            total_bytes += p.size
            if largest_page is None or p.size > largest_page.size:
                largest_page = p

            # Top-level folder, e.g. "mylib" for mylib/Foo.mdx
            parts = p.output_path.split("/")
            root = parts[0] if len(parts) > 1 else "."
            folder_counts[root] = folder_counts.get(root, 0) + 1

        nested = sum(1 for p in self.pages if p.parent_path)
        return {
            "folder_counts": folder_counts,
            "metrics": {
                "total_bytes": total_bytes,
                "nested_pages": nested,
                "average_page_size": total_bytes / len(self.pages) if self.pages else 0,
                "largest_page": largest_page.output_path if largest_page else None,
                "largest_page_size": largest_page.size if largest_page else 0,
            },
        }
