"""outhash data models — Pydantic v2, frozen except the mutable Chunk."""

from outhash.models.artifacts import Chunk, RehashResult, RenameRecord
from outhash.models.config import HashConfig, OutputOptions, PluginOptions
from outhash.models.reports import ValidationMismatch, ValidationReport
from outhash.models.stages import HookStage
