"""Asset content representations.

An asset's content is either materialized (``RawSource``) or produced on
first read and cached (``CachedSource``). These are the only two forms the
reference rewriter knows how to mutate.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path


class RawSource:
    """Content that is already in memory, as text or bytes."""

    def __init__(self, value: str | bytes) -> None:
        self.value = value

    def source(self) -> str | bytes:
        return self.value

    def buffer(self) -> bytes:
        if isinstance(self.value, str):
            return self.value.encode("utf-8")
        return self.value

    def __repr__(self) -> str:
        return f"RawSource({len(self.value)} {type(self.value).__name__})"


class CachedSource:
    """Text produced lazily by *producer*, at most once.

    ``cached_value`` is ``None`` until the first read. Assigning it replaces
    the producer's output for every later read.
    """

    def __init__(self, producer: Callable[[], str]) -> None:
        self._producer = producer
        self.cached_value: str | None = None

    @property
    def is_produced(self) -> bool:
        return self.cached_value is not None

    def source(self) -> str:
        if self.cached_value is None:
            self.cached_value = self._producer()
        return self.cached_value

    def buffer(self) -> bytes:
        return self.source().encode("utf-8")

    def __repr__(self) -> str:
        state = "produced" if self.is_produced else "pending"
        return f"CachedSource({state})"


class Asset:
    """A named build output held in the ``AssetRepository``.

    Parameters
    ----------
    name:
        The current, hash-bearing file name (relative to the output path).
    source:
        A ``RawSource`` or ``CachedSource``.
    """

    def __init__(self, name: str, source: RawSource | CachedSource) -> None:
        self.name = name
        self.source = source
        self.emitted_path: Path | None = None  # set once written to disk

    def content(self) -> str | bytes:
        return self.source.source()

    def buffer(self) -> bytes:
        return self.source.buffer()

    def __repr__(self) -> str:
        return f"Asset(name={self.name!r}, source={self.source!r})"
