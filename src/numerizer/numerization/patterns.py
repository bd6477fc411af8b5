#!/usr/bin/env python3
"""
Pattern matching and replacement primitives for the rewriting pipeline.

This module provides thread-safe LRU caching for compiled regex patterns and a
small find/replace interface on top of ``re``:

- ``matches``: does the pattern occur anywhere in the text
- ``find_all``: all non-overlapping matches, left to right
- ``replace``: replace every non-overlapping match, either through a callback
  receiving the ``re.Match`` or with a literal string

Usage:
    from numerizer.numerization.patterns import replace

    replace(r"(\\w+),\\s(\\w+)", "Hello, World!", lambda m: f"{m[2]}, {m[1]}")
    # "World, Hello!"
"""
from __future__ import annotations

import re
import threading
from typing import Callable, Pattern, Union

Replacement = Union[str, Callable[[re.Match], str]]

# Global cache configuration
_CACHE_SIZE = 256
_pattern_cache: dict[tuple[str, int], Pattern[str]] = {}
_cache_access_order: list[tuple[str, int]] = []
_cache_lock = threading.Lock()
_cache_stats = {
    'hits': 0,
    'misses': 0,
    'evictions': 0,
    'size': 0
}


def _evict_lru_if_needed() -> None:
    """
    Evict least recently used pattern if cache is at capacity.

    This function assumes the cache lock is already held.
    """
    while _pattern_cache and len(_pattern_cache) >= _CACHE_SIZE:
        lru_key = _cache_access_order.pop(0)
        del _pattern_cache[lru_key]
        _cache_stats['evictions'] += 1


def _update_access_order(cache_key: tuple[str, int]) -> None:
    """
    Move a key to the most recently used end.

    This function assumes the cache lock is already held.
    """
    if cache_key in _cache_access_order:
        _cache_access_order.remove(cache_key)
    _cache_access_order.append(cache_key)


def compile_pattern(pattern: str | Pattern[str], flags: int = 0) -> Pattern[str]:
    """
    Get or create a compiled regex pattern with caching.

    Args:
        pattern: Regex source, or an already compiled pattern (returned as is)
        flags: ``re`` flags used when compiling

    Returns:
        The compiled pattern
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    cache_key = (pattern, flags)

    with _cache_lock:
        if cache_key in _pattern_cache:
            _cache_stats['hits'] += 1
            _update_access_order(cache_key)
            return _pattern_cache[cache_key]

    # Compile outside of lock to minimize lock time
    compiled = re.compile(pattern, flags)

    with _cache_lock:
        # Double-check that another thread didn't add this pattern
        if cache_key not in _pattern_cache:
            _evict_lru_if_needed()
            _pattern_cache[cache_key] = compiled
            _cache_stats['misses'] += 1
        else:
            _cache_stats['hits'] += 1
            compiled = _pattern_cache[cache_key]
        _update_access_order(cache_key)
        _cache_stats['size'] = len(_pattern_cache)

    return compiled


def matches(pattern: str | Pattern[str], text: str, flags: int = 0) -> bool:
    """Check if the given pattern occurs in the text or not."""
    return compile_pattern(pattern, flags).search(text) is not None


def find_all(pattern: str | Pattern[str], text: str, flags: int = 0) -> list[re.Match]:
    """Return every non-overlapping match of the pattern, left to right."""
    return list(compile_pattern(pattern, flags).finditer(text))


def replace(pattern: str | Pattern[str], text: str, replacement: Replacement, flags: int = 0) -> str:
    """
    Replace all occurrences of the pattern in the text.

    Args:
        pattern: The pattern to replace in the text
        text: The text to search
        replacement: Either a function receiving the ``re.Match`` and returning
            the replacement, or a literal string. Literal strings are inserted
            as is; backslashes and group references are not expanded.
        flags: ``re`` flags used when compiling the pattern

    Returns:
        A new string with the occurrences replaced, or the input unchanged if
        nothing matched
    """
    compiled = compile_pattern(pattern, flags)
    if callable(replacement):
        return compiled.sub(replacement, text)
    return compiled.sub(lambda _match: replacement, text)


def get_cache_stats() -> dict[str, float]:
    """
    Get current cache statistics.

    Returns:
        Dictionary containing cache hit/miss ratios, evictions, and current size
    """
    with _cache_lock:
        stats: dict[str, float] = dict(_cache_stats)
        total_requests = stats['hits'] + stats['misses']
        if total_requests > 0:
            stats['hit_ratio'] = stats['hits'] / total_requests
            stats['miss_ratio'] = stats['misses'] / total_requests
        else:
            stats['hit_ratio'] = 0.0
            stats['miss_ratio'] = 0.0
        return stats


def clear_cache() -> None:
    """Clear all cached patterns and reset the statistics."""
    with _cache_lock:
        _pattern_cache.clear()
        _cache_access_order.clear()
        _cache_stats.update({
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'size': 0
        })


def configure_cache(cache_size: int = 256) -> None:
    """
    Configure cache settings.

    Args:
        cache_size: Maximum number of patterns to cache
    """
    global _CACHE_SIZE

    if cache_size < 1:
        raise ValueError("cache_size must be at least 1")

    with _cache_lock:
        _CACHE_SIZE = cache_size
        # If new size is smaller, evict excess patterns
        while len(_pattern_cache) > _CACHE_SIZE:
            lru_key = _cache_access_order.pop(0)
            del _pattern_cache[lru_key]
            _cache_stats['evictions'] += 1
        _cache_stats['size'] = len(_pattern_cache)
