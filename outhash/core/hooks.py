"""Ordered, named extension points of a build.

Each stage keeps its taps in registration order. Calling a stage invokes
every tap synchronously; the first failure stops the stage and surfaces as
``HookExecutionError`` naming the stage and tap.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from outhash.models.stages import HookStage

logger = logging.getLogger(__name__)


class HookExecutionError(RuntimeError):
    """Raised when a tap registered on a hook stage fails."""

    def __init__(self, stage: HookStage, tap_name: str, cause: BaseException) -> None:
        self.stage = stage
        self.tap_name = tap_name
        super().__init__(f"{tap_name} failed during {stage.value}: {cause}")


class UnknownStageError(ValueError):
    """Raised when tapping a stage the registry does not expose."""


class Tap(BaseModel):
    """A named callback registered on a stage."""

    model_config = ConfigDict(frozen=True)

    name: str
    callback: Callable[..., Any]


class HookRegistry:
    """Holds the taps of a fixed set of stages.

    Parameters
    ----------
    stages:
        The stages this registry accepts taps for.
    """

    def __init__(self, stages: Iterable[HookStage]) -> None:
        self._taps: dict[HookStage, list[Tap]] = {stage: [] for stage in stages}

    @property
    def stages(self) -> list[HookStage]:
        return list(self._taps)

    def tap(self, stage: HookStage, name: str, callback: Callable[..., Any]) -> None:
        """Register *callback* under *name* to run when *stage* is called."""
        if stage not in self._taps:
            raise UnknownStageError(
                f"Stage {stage.value!r} is not available here. "
                f"Available: {[s.value for s in self._taps]}"
            )
        self._taps[stage].append(Tap(name=name, callback=callback))
        logger.debug("Tapped %s into %s", name, stage.value)

    def taps(self, stage: HookStage) -> list[str]:
        """Names of the taps registered on *stage*, in call order."""
        return [t.name for t in self._taps.get(stage, [])]

    def call(self, stage: HookStage, *args: Any) -> None:
        """Invoke every tap of *stage* with *args*, in registration order."""
        for tap in self._taps.get(stage, []):
            try:
                tap.callback(*args)
            except Exception as exc:
                logger.error("%s [%s] failed: %s", tap.name, stage.value, exc)
                raise HookExecutionError(stage, tap.name, exc) from exc
