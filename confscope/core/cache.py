"""Content-keyed memoization of inheritance chains."""

from __future__ import annotations

import hashlib
import json
import math
import threading
import time
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import structlog

from .chain import build_chain
from .entries import coerce_entries
from .errors import CacheConfigError
from .types import UNDEFINED, CacheRecord, ConfigEntry, InheritanceChain

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENTRIES = 10
DEFAULT_TTL_MS = 60_000

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def _canonical(value: Any) -> Any:
    """Tagged, order-stable form of a value that agrees with deep_equal."""
    if value is UNDEFINED:
        return ["u"]
    if value is None:
        return ["z"]
    if isinstance(value, bool):
        return ["b", value]
    if isinstance(value, int):
        return ["n", str(value)]
    if isinstance(value, float):
        if math.isnan(value):
            return ["n", "NaN"]
        if math.isinf(value):
            return ["n", "Infinity" if value > 0 else "-Infinity"]
        # 1 and 1.0 are the same JSON number
        return ["n", str(int(value)) if value.is_integer() else repr(value)]
    if isinstance(value, str):
        return ["s", value]
    if isinstance(value, (list, tuple)):
        return ["a", [_canonical(v) for v in value]]
    if isinstance(value, Mapping):
        # keys keep their type tag so {1: x} and {"1": x} stay apart
        items = [(_canonical(k), _canonical(v)) for k, v in value.items()]
        items.sort(key=lambda kv: json.dumps(kv[0], separators=(",", ":")))
        return ["o", [[k, v] for k, v in items]]
    return ["x", type(value).__name__, repr(value)]


def _canonical_entry(entry: ConfigEntry) -> List[Any]:
    source = None
    if entry.source is not None:
        source = [entry.source.type, entry.source.path, entry.source.priority]
    return [entry.key, _canonical(entry.value), source]


def content_hash(entries: List[ConfigEntry]) -> str:
    """Hash the logical content of an entry list.

    Object keys are order independent, arrays are order sensitive, and
    values that are deep-equal hash identically.
    """
    payload = json.dumps([_canonical_entry(e) for e in entries], separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass
class CacheStats:
    """Counters describing cache behaviour since creation or last reset."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0


class ChainCache:
    """Bounded, expiring memoization of ``build_chain``.

    Entries are keyed by a hash of the input's content, so new list
    instances with equal content hit the same slot. Once more than
    ``max_entries`` are stored the oldest insertion is evicted (FIFO, reads
    do not refresh position). Records older than ``ttl_ms`` are treated as
    misses when looked up. All table access is serialized by a lock.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_ms: float = DEFAULT_TTL_MS,
        clock: Optional[Clock] = None,
        builder: Callable[[List[ConfigEntry]], InheritanceChain] = build_chain,
    ):
        """Initialize ChainCache.

        Args:
            max_entries: Maximum number of memoized chains.
            ttl_ms: Lifetime of a memoized chain in milliseconds.
            clock: Callable returning the current time in milliseconds.
            builder: Function computing a chain on a miss.

        Raises:
            CacheConfigError: If a bound is not positive.
        """
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries < 1:
            raise CacheConfigError(f"max_entries must be a positive integer, got {max_entries!r}")
        if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, (int, float)) or ttl_ms <= 0:
            raise CacheConfigError(f"ttl_ms must be a positive number, got {ttl_ms!r}")
        self.max_entries = max_entries
        self.ttl_ms = ttl_ms
        self._clock: Clock = clock or monotonic_ms
        self._builder = builder
        self._records: "OrderedDict[str, CacheRecord]" = OrderedDict()
        self._lock = threading.RLock()
        self.stats = CacheStats()

    def calculate_inheritance_chain(self, entries: Any) -> InheritanceChain:
        """Return the memoized chain for ``entries``, building it on a miss.

        A hit returns the very object stored earlier, so callers can compare
        by identity to detect that nothing changed.

        Raises:
            InvalidEntriesError: If ``entries`` is not a sequence of entries.
        """
        ordered = coerce_entries(entries)
        key = content_hash(ordered)
        with self._lock:
            now = self._clock()
            record = self._records.get(key)
            if record is not None:
                if now - record.timestamp <= self.ttl_ms:
                    self.stats.hits += 1
                    logger.debug("chain_cache.hit", key=key[:12])
                    return record.value
                # expired: drop it so the rebuild is a fresh insertion
                del self._records[key]
                self.stats.expirations += 1
                logger.debug("chain_cache.expired", key=key[:12], age_ms=now - record.timestamp)

            self.stats.misses += 1
            chain = self._builder(ordered)
            self._records[key] = CacheRecord(key=key, value=chain, timestamp=now)
            logger.debug("chain_cache.stored", key=key[:12], size=len(self._records))

            if len(self._records) > self.max_entries:
                evicted, _ = self._records.popitem(last=False)
                self.stats.evictions += 1
                logger.debug("chain_cache.evicted", key=evicted[:12])
            return chain

    def clear(self) -> None:
        """Discard every memoized chain."""
        with self._lock:
            dropped = len(self._records)
            self._records.clear()
        logger.debug("chain_cache.cleared", dropped=dropped)

    def __contains__(self, entries: Any) -> bool:
        """True if a live (unexpired) chain is stored for ``entries``."""
        key = content_hash(coerce_entries(entries))
        with self._lock:
            record = self._records.get(key)
            return record is not None and self._clock() - record.timestamp <= self.ttl_ms

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def keys(self) -> List[str]:
        """Content hashes currently stored, oldest insertion first.

        Expired records are listed until a lookup replaces them.
        """
        with self._lock:
            return list(self._records.keys())
