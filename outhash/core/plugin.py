"""OutputHashPlugin — wires the rehash core into the host hook stages.

* ``compilation``           builds the hasher from the compilation's output
                            options and taps the two stages below.
* ``optimize-chunk-assets`` keeps the chunk list; the next stage only sees
                            the asset repository.
* ``optimize-assets``       runs the two-phase renamer.
* ``after-emit``            runs the output validator (``validate_output``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from outhash.core.compilation import Compilation, Compiler
from outhash.core.hasher import ContentHasher
from outhash.core.renamer import TwoPhaseRenamer
from outhash.core.repository import AssetRepository
from outhash.core.validator import OutputValidator, ValidationMismatchError
from outhash.models.artifacts import Chunk, RehashResult
from outhash.models.config import HashConfig, PluginOptions
from outhash.models.reports import ValidationReport
from outhash.models.stages import HookStage

logger = logging.getLogger(__name__)

PLUGIN_NAME = "OutputHashPlugin"


class OutputHashPlugin:
    """Recomputes output file hashes after the final content transforms.

    Parameters
    ----------
    options:
        Plugin options. Keyword arguments are accepted as a shortcut, e.g.
        ``OutputHashPlugin(index_artifact_names={"vendor"})``.
    """

    def __init__(self, options: PluginOptions | None = None, **kwargs: object) -> None:
        if options is None:
            options = PluginOptions(**kwargs)
        elif kwargs:
            options = PluginOptions(**{**options.model_dump(), **kwargs})
        self.options = options
        self.hasher: ContentHasher | None = None
        self.result: RehashResult | None = None
        self.validation: ValidationReport | None = None
        self._chunks: list[Chunk] | None = None

    def apply(self, compiler: Compiler) -> None:
        compiler.hooks.tap(HookStage.COMPILATION, PLUGIN_NAME, self._on_compilation)
        if self.options.validate_output:
            compiler.hooks.tap(HookStage.AFTER_EMIT, PLUGIN_NAME, self._validate_output)

    # ------------------------------------------------------------------
    # Taps
    # ------------------------------------------------------------------

    def _on_compilation(self, compilation: Compilation) -> None:
        self.hasher = ContentHasher(
            HashConfig.from_output_options(compilation.output_options)
        )
        self._chunks = None
        compilation.hooks.tap(
            HookStage.OPTIMIZE_CHUNK_ASSETS, PLUGIN_NAME, self._capture_chunks
        )
        compilation.hooks.tap(HookStage.OPTIMIZE_ASSETS, PLUGIN_NAME, self._rehash_assets)

    def _capture_chunks(self, chunks: Iterable[Chunk]) -> None:
        self._chunks = list(chunks)

    def _rehash_assets(self, assets: AssetRepository) -> None:
        if self.hasher is None or self._chunks is None:
            raise RuntimeError(
                f"{PLUGIN_NAME}: optimize-assets ran before the chunks were captured"
            )
        renamer = TwoPhaseRenamer(self.hasher, self.options.index_artifact_names)
        self.result = renamer.run(self._chunks, assets)
        logger.info(
            "%s: %d of %d chunk files renamed",
            PLUGIN_NAME,
            self.result.renamed_count,
            len(self.result.records),
        )

    def _validate_output(self, compilation: Compilation) -> None:
        if self.hasher is None:
            raise RuntimeError(f"{PLUGIN_NAME}: after-emit ran before compilation")
        validator = OutputValidator(self.hasher, self.options.validate_output_pattern)
        self.validation = validator.check(compilation.assets.values())
        if not self.validation.passed:
            raise ValidationMismatchError(self.validation)

    def __repr__(self) -> str:
        return (
            f"OutputHashPlugin(index={sorted(self.options.index_artifact_names)!r}, "
            f"validate_output={self.options.validate_output!r})"
        )
