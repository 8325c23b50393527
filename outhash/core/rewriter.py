"""Rewrite stale hash fragments inside index assets.

Every occurrence of every old fragment is replaced by plain substring
replacement. A short fragment that happens to occur in unrelated text is
replaced too; references are not parsed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from outhash.core.assets import Asset, CachedSource, RawSource

logger = logging.getLogger(__name__)


class UnsupportedArtifactError(TypeError):
    """Raised when an asset's content cannot be rewritten in place."""


def rewrite_text(text: str, rename_map: Mapping[str, str]) -> str:
    """Apply every ``old -> new`` entry of *rename_map* to *text*."""
    for old_hash, new_hash in rename_map.items():
        text = text.replace(old_hash, new_hash)
    return text


class ReferenceRewriter:
    """Applies a rename map to an asset's content, in place."""

    def rewrite(self, asset: Asset, rename_map: Mapping[str, str]) -> str:
        """Rewrite *asset* and return its new text.

        A ``CachedSource`` is produced once and its cache is replaced by the
        rewritten text, so the producer is never consulted again.
        """
        source = asset.source
        if isinstance(source, RawSource):
            if not isinstance(source.value, str):
                raise UnsupportedArtifactError(
                    f"Asset {asset.name} holds binary content; "
                    "references can only be rewritten in text assets"
                )
            rewritten = rewrite_text(source.value, rename_map)
            source.value = rewritten
        elif isinstance(source, CachedSource):
            rewritten = rewrite_text(source.source(), rename_map)
            source.cached_value = rewritten
        else:
            raise UnsupportedArtifactError(
                f"Unknown asset source type ({type(source).__name__}) for "
                f"{asset.name}. Only RawSource and CachedSource can be rewritten."
            )

        logger.debug(
            "Rewrote references in %s using %d rename entries",
            asset.name,
            len(rename_map),
        )
        return rewritten
