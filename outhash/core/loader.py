"""Load an emitted build directory as chunks and assets.

Every regular file becomes an asset named by its POSIX path relative to the
build directory. Files whose name matches the chunk filename pattern also
become chunks; the pattern must define ``name`` and ``hash`` groups.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from outhash.core.assets import Asset, CachedSource, RawSource
from outhash.core.repository import AssetRepository
from outhash.models.artifacts import Chunk

logger = logging.getLogger(__name__)

# Hash fragments are at least 8 hex characters; "lib.cafe.js" is not a chunk.
DEFAULT_FILENAME_PATTERN = r"^(?P<name>.+)\.(?P<hash>[0-9a-fA-F]{8,})\.[^./]+$"


def _load_source(path: Path) -> RawSource | CachedSource:
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return RawSource(data)
    return CachedSource(lambda: text)


def load_build_dir(
    build_dir: Path,
    filename_pattern: str = DEFAULT_FILENAME_PATTERN,
) -> tuple[list[Chunk], AssetRepository]:
    """Scan *build_dir* and return ``(chunks, repository)``.

    Assets keep ``emitted_path`` pointing at the file they were read from,
    so the directory can be validated without re-emitting it.
    """
    build_dir = Path(build_dir)
    if not build_dir.is_dir():
        raise FileNotFoundError(f"Build directory not found: {build_dir}")

    pattern = re.compile(filename_pattern)
    if not {"name", "hash"} <= set(pattern.groupindex):
        raise ValueError(
            f"Filename pattern {filename_pattern!r} must define 'name' and 'hash' groups"
        )

    chunks: list[Chunk] = []
    repository = AssetRepository()
    for path in sorted(p for p in build_dir.rglob("*") if p.is_file()):
        name = path.relative_to(build_dir).as_posix()
        asset = Asset(name, _load_source(path))
        asset.emitted_path = path
        repository.add(asset)

        match = pattern.match(path.name)
        if match is None:
            continue
        prefix = name[: len(name) - len(path.name)]
        chunks.append(
            Chunk(
                name=prefix + match.group("name"),
                files=[name],
                hash=match.group("hash"),
                rendered_hash=match.group("hash"),
            )
        )

    logger.info(
        "Loaded %d assets (%d chunks) from %s", len(repository), len(chunks), build_dir
    )
    return chunks, repository
