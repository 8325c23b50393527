"""Minimal host build model — compilation, compiler and emitter.

The compiler drives a single compilation through the hook stages in a fixed
order:

    compilation -> optimize-chunk-assets -> optimize-assets
        -> emit -> (write assets) -> after-emit

Emission only happens when ``OutputOptions.path`` is set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from outhash.core.assets import Asset
from outhash.core.hooks import HookRegistry
from outhash.core.repository import AssetRepository
from outhash.models.artifacts import Chunk
from outhash.models.config import OutputOptions
from outhash.models.stages import COMPILATION_STAGES, COMPILER_STAGES, HookStage

logger = logging.getLogger(__name__)


class Plugin(Protocol):
    """Anything that registers taps on a compiler."""

    def apply(self, compiler: Compiler) -> None: ...


class Compilation:
    """One build: its chunks, the asset repository and the output options."""

    def __init__(
        self,
        chunks: Iterable[Chunk],
        assets: AssetRepository,
        output_options: OutputOptions,
    ) -> None:
        self.chunks = list(chunks)
        self.assets = assets
        self.output_options = output_options
        self.hooks = HookRegistry(COMPILATION_STAGES)

    def __repr__(self) -> str:
        return f"Compilation({len(self.chunks)} chunks, {len(self.assets)} assets)"


class Compiler:
    """Runs compilations through the hook stages and emits their assets.

    Parameters
    ----------
    output_options:
        Host output settings shared by every compilation.
    """

    def __init__(self, output_options: OutputOptions | None = None) -> None:
        self.output_options = output_options or OutputOptions()
        self.hooks = HookRegistry(COMPILER_STAGES)

    def apply(self, *plugins: Plugin) -> None:
        for plugin in plugins:
            plugin.apply(self)

    def run(
        self,
        chunks: Iterable[Chunk],
        assets: AssetRepository | Iterable[Asset],
    ) -> Compilation:
        """Build one compilation and return it once every stage has run."""
        if not isinstance(assets, AssetRepository):
            assets = AssetRepository(assets)
        compilation = Compilation(chunks, assets, self.output_options)

        self.hooks.call(HookStage.COMPILATION, compilation)
        compilation.hooks.call(HookStage.OPTIMIZE_CHUNK_ASSETS, compilation.chunks)
        compilation.hooks.call(HookStage.OPTIMIZE_ASSETS, compilation.assets)

        if self.output_options.path is not None:
            self.hooks.call(HookStage.EMIT, compilation)
            self.emit(compilation, self.output_options.path)
            self.hooks.call(HookStage.AFTER_EMIT, compilation)
        return compilation

    def emit(self, compilation: Compilation, output_path: Path) -> list[Path]:
        """Write every asset under *output_path* and record where it went."""
        written: list[Path] = []
        for asset in compilation.assets.values():
            target = Path(output_path) / asset.name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(asset.buffer())
            asset.emitted_path = target
            written.append(target)
        logger.info("Emitted %d assets to %s", len(written), output_path)
        return written

    def __repr__(self) -> str:
        taps: dict[str, Any] = {s.value: self.hooks.taps(s) for s in self.hooks.stages}
        return f"Compiler(taps={taps})"
