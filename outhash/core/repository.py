"""Mutable asset collection keyed by current file name.

Renaming is a destructive key change: the asset is removed under its old
name and inserted under the new one. No two live assets share a name and no
asset is left behind under a superseded name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from outhash.core.assets import Asset

logger = logging.getLogger(__name__)


class AssetNotFoundError(KeyError):
    """Raised when an asset name is not present in the repository."""


class AssetNameConflictError(RuntimeError):
    """Raised when a rename or insert would shadow another live asset."""


class AssetRepository:
    """Name -> ``Asset`` mapping with rename support.

    Iteration follows insertion order; a renamed asset moves to the end,
    which matches how the host re-inserts renamed assets.
    """

    def __init__(self, assets: Iterable[Asset] = ()) -> None:
        self._assets: dict[str, Asset] = {}
        for asset in assets:
            self.add(asset)

    # ------------------------------------------------------------------
    # Mapping access
    # ------------------------------------------------------------------

    def __getitem__(self, name: str) -> Asset:
        try:
            return self._assets[name]
        except KeyError:
            raise AssetNotFoundError(f"Asset not found: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._assets))

    def __len__(self) -> int:
        return len(self._assets)

    def get(self, name: str) -> Asset | None:
        return self._assets.get(name)

    def names(self) -> list[str]:
        return list(self._assets)

    def values(self) -> list[Asset]:
        return list(self._assets.values())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, asset: Asset) -> None:
        """Insert a new asset. Fails if the name is already taken."""
        if asset.name in self._assets:
            raise AssetNameConflictError(f"Asset already exists: {asset.name}")
        self._assets[asset.name] = asset

    def rename(self, old_name: str, new_name: str) -> Asset:
        """Move the asset at *old_name* to *new_name* and update ``asset.name``.

        Renaming to the same name is a no-op.
        """
        asset = self[old_name]
        if new_name == old_name:
            return asset
        if new_name in self._assets:
            raise AssetNameConflictError(
                f"Cannot rename {old_name} to {new_name}: name already in use"
            )
        del self._assets[old_name]
        asset.name = new_name
        self._assets[new_name] = asset
        logger.debug("Renamed asset %s -> %s", old_name, new_name)
        return asset

    def __repr__(self) -> str:
        return f"AssetRepository({len(self._assets)} assets)"
