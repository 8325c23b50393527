"""Shared test fixtures for outhash."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from outhash.core.assets import Asset, CachedSource, RawSource
from outhash.core.hasher import ContentHasher
from outhash.core.repository import AssetRepository
from outhash.models.artifacts import Chunk
from outhash.models.config import HashConfig


def md5_short(data: str | bytes, length: int = 8) -> str:
    """Reference digest computed straight from hashlib."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()[:length]


@pytest.fixture
def hash_config() -> HashConfig:
    """md5 / hex / 8 characters, no salt."""
    return HashConfig(algorithm="md5", digest_encoding="hex", digest_length=8)


@pytest.fixture
def hasher(hash_config: HashConfig) -> ContentHasher:
    return ContentHasher(hash_config)


@pytest.fixture
def build_chunks() -> tuple[list[Chunk], AssetRepository]:
    """Two ordinary chunks and one index chunk that references both.

    a.ABCDEFGH.js -> "X", b.12345678.js -> "Y", vendor.99999999.js lists both.
    """
    chunks = [
        Chunk(name="a", files=["a.ABCDEFGH.js"], hash="ABCDEFGH", rendered_hash="ABCDEFGH"),
        Chunk(name="b", files=["b.12345678.js"], hash="12345678", rendered_hash="12345678"),
        Chunk(
            name="vendor",
            files=["vendor.99999999.js"],
            hash="99999999",
            rendered_hash="99999999",
        ),
    ]
    repository = AssetRepository([
        Asset("a.ABCDEFGH.js", RawSource("X")),
        Asset("b.12345678.js", RawSource("Y")),
        Asset(
            "vendor.99999999.js",
            CachedSource(lambda: 'load("a.ABCDEFGH.js");load("b.12345678.js");'),
        ),
    ])
    return chunks, repository


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """An emitted build directory with stale hashes in every chunk name."""
    out = tmp_path / "dist"
    out.mkdir()
    (out / "entry.0123abcd.js").write_text("console.log('entry');", encoding="utf-8")
    (out / "vendor.89abcdef.js").write_text(
        'var chunks = {"entry": "entry.0123abcd.js"};', encoding="utf-8"
    )
    (out / "index.html").write_text(
        '<script src="vendor.89abcdef.js"></script>', encoding="utf-8"
    )
    return out
