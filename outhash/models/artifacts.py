"""Chunk and rename-record models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Chunk(BaseModel):
    """A logical build output.

    Unlike the other models a chunk is mutable: the renamer updates its
    hashes and first file name in place once the real content hash is known.
    ``files[0]`` is the chunk's asset name in the repository.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str
    files: list[str] = []
    hash: str = ""  # full digest
    rendered_hash: str = ""  # digest fragment embedded in files[0]


class RenameRecord(BaseModel):
    """One rehashed chunk: where its asset was and where it went."""

    model_config = ConfigDict(frozen=True)

    chunk_name: str
    old_name: str
    new_name: str
    old_hash: str
    new_hash: str
    is_index: bool = False

    @property
    def renamed(self) -> bool:
        return self.old_name != self.new_name


class RehashResult(BaseModel):
    """Outcome of one two-phase rehash run."""

    model_config = ConfigDict(frozen=True)

    records: list[RenameRecord] = []
    rename_map: dict[str, str] = {}  # old hash fragment -> new hash fragment
    rewritten: list[str] = []  # unhashed index assets, rewritten in place

    @property
    def renamed_count(self) -> int:
        return sum(1 for r in self.records if r.renamed)

    def file_renames(self) -> dict[str, str]:
        """Map of old asset name -> new asset name for renamed assets."""
        return {r.old_name: r.new_name for r in self.records if r.renamed}
