"""LRU cache for declaration-reference resolution results."""

import logging
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mintdoc.api_item import ApiItem
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.resolution_result import ResolveResult

Resolver = Callable[[DeclarationReference, ApiItem | None], ResolveResult]

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 500

# Shared key for "no context item"; tagged so it cannot equal an item identity.
_NO_CONTEXT: tuple[str] = ("no-context",)


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time statistics for a cache."""

    size: int
    max_size: int
    hit_count: int
    miss_count: int
    hit_rate: float
    enabled: bool


def cache_key(
    reference: DeclarationReference, context: ApiItem | None = None
) -> tuple[Any, ...]:
    """Build the canonical key for a reference resolved in a context.

    The key is made of the reference's typed fields and the structural identity
    of the context item, so equal inputs always share a key and distinct
    inputs never do.
    """
    ref_key = (
        "ref",
        reference.package_name,
        tuple(reference.member_names),
        reference.overload_index,
        reference.meaning,
    )
    ctx_key = ("context", context.identity_key()) if context is not None else _NO_CONTEXT
    return (ref_key, ctx_key)


class ApiResolutionCache:
    """Bounded memoizer for reference resolution.

    Reads refresh recency; inserting a new key into a full cache evicts the
    least recently used entry. Updating an existing key never evicts.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE, *, enabled: bool = True) -> None:
        """Initialize the cache with a capacity and an on/off switch."""
        if max_size < 1:
            msg = f"max_size must be positive, got {max_size}"
            raise ValueError(msg)
        self.max_size = max_size
        self.enabled = enabled
        self._entries: OrderedDict[tuple[Any, ...], ResolveResult] = OrderedDict()
        self.hit_count = 0
        self.miss_count = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self, reference: DeclarationReference, context: ApiItem | None = None
    ) -> ResolveResult | None:
        """Return the cached result, or ``None`` on a miss."""
        if not self.enabled:
            return None
        key = cache_key(reference, context)
        result = self._entries.get(key)
        if result is None:
            self.miss_count += 1
            return None
        self.hit_count += 1
        self._entries.move_to_end(key)
        return result

    def set(
        self,
        reference: DeclarationReference,
        context: ApiItem | None,
        result: ResolveResult,
    ) -> None:
        """Store a result, evicting the least recently used entry if full."""
        if not self.enabled:
            return
        key = cache_key(reference, context)
        if key not in self._entries and len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted resolution cache entry %s", evicted)
        self._entries[key] = result

    def clear(self) -> None:
        """Drop all entries and reset the counters."""
        self._entries.clear()
        self.hit_count = 0
        self.miss_count = 0

    def get_stats(self) -> CacheStats:
        """Return size, capacity and hit statistics."""
        total = self.hit_count + self.miss_count
        return CacheStats(
            size=len(self._entries),
            max_size=self.max_size,
            hit_count=self.hit_count,
            miss_count=self.miss_count,
            hit_rate=self.hit_count / total if total else 0.0,
            enabled=self.enabled,
        )

    def wrap(self, resolve_fn: Resolver) -> Resolver:
        """Return a memoizing version of ``resolve_fn``."""

        def cached_resolve(
            reference: DeclarationReference, context: ApiItem | None = None
        ) -> ResolveResult:
            cached = self.get(reference, context)
            if cached is not None:
                return cached
            result = resolve_fn(reference, context)
            self.set(reference, context, result)
            return result

        return cached_resolve
