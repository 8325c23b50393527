"""Host pipeline hook stages, in execution order."""

from __future__ import annotations

from enum import Enum


class HookStage(str, Enum):
    """Named extension points of a build, listed in the order they run."""

    COMPILATION = "compilation"
    OPTIMIZE_CHUNK_ASSETS = "optimize-chunk-assets"
    OPTIMIZE_ASSETS = "optimize-assets"
    EMIT = "emit"
    AFTER_EMIT = "after-emit"


# Stages tapped on the compiler vs. on each compilation.
COMPILER_STAGES: tuple[HookStage, ...] = (
    HookStage.COMPILATION,
    HookStage.EMIT,
    HookStage.AFTER_EMIT,
)
COMPILATION_STAGES: tuple[HookStage, ...] = (
    HookStage.OPTIMIZE_CHUNK_ASSETS,
    HookStage.OPTIMIZE_ASSETS,
)

STAGE_ORDER: tuple[HookStage, ...] = tuple(HookStage)
