"""Data model for the outcome of resolving a declaration reference."""

from dataclasses import dataclass

from mintdoc.api_item import ApiItem


@dataclass(frozen=True)
class ResolveResult:
    """Either the resolved item or the reason resolution failed."""

    resolved_item: ApiItem | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the reference resolved to an item."""
        return self.resolved_item is not None
