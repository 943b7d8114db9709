"""Pattern metadata cache.

Compiled metadata is immutable and compilation is a pure function of the
pattern string, so the cache needs no invalidation. Lookups are plain dict
reads; the lock only serializes inserts. Two threads compiling the same new
pattern at once both produce equal metadata and the first insert is kept.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from numberformat.patterns.catalogue import standard_patterns
from numberformat.patterns.compiler import PatternMetadata, compile_pattern

logger = logging.getLogger(__name__)


class PatternCache:
    """Maps pattern strings to compiled :class:`PatternMetadata`.

    Example:
        cache = PatternCache()
        meta = cache.get_or_compile("#,##0.00")
        assert cache.get_or_compile("#,##0.00") is meta
    """

    def __init__(self, preload: Iterable[str] | None = None) -> None:
        """Initialize the cache.

        Args:
            preload: Patterns to compile eagerly. Defaults to the standard
                catalogue; pass an empty iterable to start empty.
        """
        self._entries: dict[str, PatternMetadata] = {}
        self._lock = threading.Lock()
        self._catalogue: frozenset[str] = frozenset()
        self.hits = 0
        self.misses = 0

        patterns = standard_patterns() if preload is None else tuple(preload)
        self._preload(patterns)

    def _preload(self, patterns: tuple[str, ...]) -> None:
        compiled = {pattern: compile_pattern(pattern) for pattern in patterns}
        with self._lock:
            self._entries.update(compiled)
            self._catalogue = frozenset(compiled)
        logger.debug("Preloaded %d standard patterns", len(compiled))

    def get_or_compile(self, pattern: str) -> PatternMetadata:
        """Return cached metadata, compiling and storing it on first use.

        Raises:
            PatternCompileError: If the pattern is malformed. Failures are not cached.
        """
        metadata = self._entries.get(pattern)
        if metadata is not None:
            with self._lock:
                self.hits += 1
            return metadata

        with self._lock:
            self.misses += 1
        metadata = compile_pattern(pattern)
        with self._lock:
            metadata = self._entries.setdefault(pattern, metadata)
        logger.debug("Cached pattern %r (%d entries)", pattern, len(self._entries))
        return metadata

    def get(self, pattern: str) -> PatternMetadata | None:
        return self._entries.get(pattern)

    def clear(self) -> None:
        """Drop ad hoc patterns, keeping the preloaded catalogue."""
        with self._lock:
            self._entries = {p: m for p, m in self._entries.items() if p in self._catalogue}
            self.hits = 0
            self.misses = 0

    @property
    def catalogue(self) -> frozenset[str]:
        return self._catalogue

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._entries

    def __len__(self) -> int:
        return len(self._entries)


_pattern_cache: PatternCache | None = None
_cache_lock = threading.Lock()


def get_pattern_cache() -> PatternCache:
    """Get the process-wide pattern cache, creating it on first use."""
    global _pattern_cache
    if _pattern_cache is None:
        with _cache_lock:
            if _pattern_cache is None:
                _pattern_cache = PatternCache()
    return _pattern_cache
