"""Two-phase rehash and rename of chunk assets.

Phase ordering is the correctness mechanism:

    ordinary chunks: hash -> rename -> record old/new fragment
        -> index chunks: rewrite references -> hash -> rename

Index chunks are only touched once the rename map is complete, so their
content never refers to a stale name and their own hash reflects the
rewritten bytes. Unhashed index assets (an HTML page, a manifest) are
rewritten after that and never renamed. A failure anywhere aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from outhash.core.assets import Asset
from outhash.core.hasher import ContentHasher
from outhash.core.repository import AssetRepository
from outhash.core.rewriter import ReferenceRewriter
from outhash.models.artifacts import Chunk, RehashResult, RenameRecord

logger = logging.getLogger(__name__)


class RenameError(RuntimeError):
    """Raised when a chunk cannot be rehashed consistently."""


def substitute_hash(name: str, old_hash: str, new_hash: str) -> str:
    """Replace the first *old_hash* in *name*, preferring its basename."""
    directory, sep, basename = name.rpartition("/")
    if old_hash in basename:
        return directory + sep + basename.replace(old_hash, new_hash, 1)
    return name.replace(old_hash, new_hash, 1)


class TwoPhaseRenamer:
    """Rehashes chunk assets and propagates the new names into index chunks.

    Parameters
    ----------
    hasher:
        The run's content hasher.
    index_names:
        Logical chunk names whose assets reference other chunks, or names of
        unhashed assets (``index.html``) that do.
    rewriter:
        Reference rewriter for index assets. A default one is created.
    """

    def __init__(
        self,
        hasher: ContentHasher,
        index_names: Iterable[str] = (),
        rewriter: ReferenceRewriter | None = None,
    ) -> None:
        self.hasher = hasher
        self.index_names = frozenset(index_names)
        self.rewriter = rewriter or ReferenceRewriter()

    def is_index(self, chunk: Chunk) -> bool:
        return chunk.name in self.index_names

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, chunks: Sequence[Chunk], repository: AssetRepository) -> RehashResult:
        """Rehash every chunk in two phases and return the rename records.

        Index names that designate an unhashed asset rather than a chunk
        (``index.html``) are rewritten last, with the ordinary and index
        chunk renames combined. They keep their name.
        """
        ordinary = [c for c in chunks if not self.is_index(c)]
        index = [c for c in chunks if self.is_index(c)]
        records: list[RenameRecord] = []
        rename_map: dict[str, str] = {}

        logger.info("Rehashing %d ordinary chunks", len(ordinary))
        for chunk in ordinary:
            record = self.rehash_chunk(chunk, repository)
            if record.old_hash in rename_map and rename_map[record.old_hash] != record.new_hash:
                logger.warning(
                    "Hash fragment %s is shared by several chunks; "
                    "index references will use the last one (%s)",
                    record.old_hash,
                    record.new_hash,
                )
            rename_map[record.old_hash] = record.new_hash
            records.append(record)

        logger.info("Rehashing %d index chunks", len(index))
        for chunk in index:
            self._rewrite(repository[self._asset_name(chunk)], rename_map)
            records.append(self.rehash_chunk(chunk, repository, is_index=True))

        chunk_files = {c.files[0] for c in chunks}
        chunk_names = {c.name for c in chunks}
        full_map = {**rename_map, **{r.old_hash: r.new_hash for r in records if r.is_index}}
        rewritten: list[str] = []
        for name in sorted(self.index_names - chunk_names):
            if name not in repository:
                logger.warning("Index name %s matches no chunk or asset", name)
                continue
            if name in chunk_files:
                continue
            self._rewrite(repository[name], full_map)
            rewritten.append(name)

        return RehashResult(records=records, rename_map=rename_map, rewritten=rewritten)

    def _rewrite(self, asset: Asset, rename_map: dict[str, str]) -> None:
        try:
            self.rewriter.rewrite(asset, rename_map)
        except Exception as exc:
            logger.error("Rewriting references in %s failed: %s", asset.name, exc)
            raise

    # ------------------------------------------------------------------
    # Single chunk
    # ------------------------------------------------------------------

    def rehash_chunk(
        self,
        chunk: Chunk,
        repository: AssetRepository,
        *,
        is_index: bool = False,
    ) -> RenameRecord:
        """Hash the chunk's asset and rename it to embed the new short digest.

        Only the first occurrence of the old fragment is replaced, looking in
        the basename first so a directory that happens to contain the fragment
        keeps its name. The rest of the name is kept verbatim.
        """
        old_name = self._asset_name(chunk)
        old_hash = chunk.rendered_hash
        if not old_hash or old_hash not in old_name:
            raise RenameError(
                f"Chunk {chunk.name!r}: file name {old_name!r} does not "
                f"contain its rendered hash {old_hash!r}"
            )

        asset = repository[old_name]
        result = self.hasher.hash(asset.buffer())
        new_name = substitute_hash(old_name, old_hash, result.short_digest)

        try:
            repository.rename(old_name, new_name)
        except Exception as exc:
            logger.error("Renaming chunk %s failed: %s", chunk.name, exc)
            raise

        chunk.hash = result.full_digest
        chunk.rendered_hash = result.short_digest
        chunk.files[0] = new_name

        logger.info("%s: %s -> %s", chunk.name, old_name, new_name)
        return RenameRecord(
            chunk_name=chunk.name,
            old_name=old_name,
            new_name=new_name,
            old_hash=old_hash,
            new_hash=result.short_digest,
            is_index=is_index,
        )

    @staticmethod
    def _asset_name(chunk: Chunk) -> str:
        if not chunk.files:
            raise RenameError(f"Chunk {chunk.name!r} has no emitted files")
        return chunk.files[0]
