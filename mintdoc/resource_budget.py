"""Hard resource limits enforced while generating pages."""

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any

from mintdoc.api_item import ApiItem
from mintdoc.errors import BudgetError, ErrorCode

MIB = 1024 * 1024


@dataclass(frozen=True)
class ResourceLimits:
    """Limits for one generation run."""

    max_recursion_depth: int = 25
    max_processing_seconds: float = 600.0
    max_file_size_bytes: int = 50 * MIB
    max_total_output_bytes: int = 500 * MIB
    max_segment_length: int = 200

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ResourceLimits":
        """Build limits from the ``limits`` section of a loaded config."""
        section = config.get("limits") or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in known})


class ResourceBudget:
    """Tracks depth, elapsed time and output volume against :class:`ResourceLimits`."""

    def __init__(
        self,
        limits: ResourceLimits | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the tracker; the clock starts immediately."""
        self.limits = limits or ResourceLimits()
        self._clock = clock
        self.started_at = clock()
        self.depth = 0
        self.total_output_bytes = 0

    def restart(self) -> None:
        """Reset all counters and the clock for a new run."""
        self.started_at = self._clock()
        self.depth = 0
        self.total_output_bytes = 0

    @property
    def elapsed(self) -> float:
        """Seconds since the run started."""
        return self._clock() - self.started_at

    @contextmanager
    def descend(self, item: ApiItem) -> Iterator[None]:
        """Account for one level of recursion below ``item``."""
        self.depth += 1
        try:
            if self.depth > self.limits.max_recursion_depth:
                msg = (
                    f"Maximum recursion depth exceeded "
                    f"({self.limits.max_recursion_depth}) below {item.describe()}"
                )
                raise BudgetError(
                    msg,
                    ErrorCode.RECURSION_LIMIT,
                    resource=item.describe(),
                    operation="descend",
                    data={"depth": self.depth},
                )
            yield
        finally:
            self.depth -= 1

    def check_time(self, item: ApiItem) -> None:
        """Fail if the run has exceeded its wall-clock allowance."""
        elapsed = self.elapsed
        if elapsed > self.limits.max_processing_seconds:
            msg = (
                f"Processing time limit exceeded at {item.describe()}: "
                f"{elapsed:.1f}s > {self.limits.max_processing_seconds}s"
            )
            raise BudgetError(
                msg,
                ErrorCode.TIME_LIMIT,
                resource=item.describe(),
                operation="check_time",
                data={"elapsed": elapsed},
            )

    def check_output(self, item: ApiItem, size: int, path: str) -> None:
        """Fail if writing ``size`` more bytes would break a size limit."""
        if size > self.limits.max_file_size_bytes:
            msg = (
                f"Generated content for {item.describe()} is {size} bytes, "
                f"over the per-file limit of {self.limits.max_file_size_bytes}"
            )
            raise BudgetError(
                msg,
                ErrorCode.FILE_SIZE_LIMIT,
                resource=path,
                operation="check_output",
                data={"size": size, "max": self.limits.max_file_size_bytes},
            )
        if self.total_output_bytes + size > self.limits.max_total_output_bytes:
            msg = (
                f"Total output would exceed {self.limits.max_total_output_bytes} bytes "
                f"when writing {item.describe()}"
            )
            raise BudgetError(
                msg,
                ErrorCode.TOTAL_SIZE_LIMIT,
                resource=path,
                operation="check_output",
                data={
                    "current": self.total_output_bytes,
                    "size": size,
                    "max": self.limits.max_total_output_bytes,
                },
            )

    def record_output(self, size: int) -> None:
        """Add written bytes to the running total."""
        self.total_output_bytes += size
