"""Tests for OutputHashPlugin wired into a Compiler."""

from __future__ import annotations

from pathlib import Path

import pytest

from outhash.core.assets import Asset, RawSource
from outhash.core.compilation import Compiler
from outhash.core.hasher import ConfigurationError
from outhash.core.hooks import HookExecutionError
from outhash.core.plugin import OutputHashPlugin
from outhash.core.validator import ValidationMismatchError
from outhash.models.artifacts import Chunk
from outhash.models.config import OutputOptions, PluginOptions
from outhash.models.stages import HookStage
from tests.conftest import md5_short


def _options(path: Path | None = None) -> OutputOptions:
    return OutputOptions(path=path, hash_function="md5", hash_digest_length=8)


class TestOutputHashPlugin:
    def test_keyword_options(self):
        plugin = OutputHashPlugin(index_artifact_names={"vendor"}, validate_output=True)
        assert plugin.options.index_artifact_names == frozenset({"vendor"})
        assert plugin.options.validate_output is True

    def test_keyword_overrides_options(self):
        plugin = OutputHashPlugin(PluginOptions(validate_output=True), validate_output=False)
        assert plugin.options.validate_output is False

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ValueError):
            PluginOptions(validate_output_pattern="(")

    def test_taps_registered(self):
        compiler = Compiler(_options())
        compiler.apply(OutputHashPlugin())
        assert compiler.hooks.taps(HookStage.COMPILATION) == ["OutputHashPlugin"]
        assert compiler.hooks.taps(HookStage.AFTER_EMIT) == []

    def test_validation_tap_only_when_enabled(self):
        compiler = Compiler(_options())
        compiler.apply(OutputHashPlugin(validate_output=True))
        assert compiler.hooks.taps(HookStage.AFTER_EMIT) == ["OutputHashPlugin"]

    def test_rehash_in_memory(self, build_chunks):
        chunks, repo = build_chunks
        plugin = OutputHashPlugin(index_artifact_names={"vendor"})
        compiler = Compiler(_options())
        compiler.apply(plugin)
        compilation = compiler.run(chunks, repo)

        assert plugin.result is not None
        assert plugin.result.renamed_count == 3
        assert f"a.{md5_short('X')}.js" in compilation.assets
        assert compilation.chunks[2].files[0].startswith("vendor.")

    def test_rehash_emit_and_validate(self, tmp_path: Path, build_chunks):
        chunks, repo = build_chunks
        plugin = OutputHashPlugin(index_artifact_names={"vendor"}, validate_output=True)
        compiler = Compiler(_options(tmp_path))
        compiler.apply(plugin)
        compiler.run(chunks, repo)

        assert plugin.validation is not None
        assert plugin.validation.passed
        assert sorted(p.name for p in tmp_path.iterdir()) == sorted(repo.names())

    def test_validation_failure_aborts(self, tmp_path: Path, build_chunks):
        chunks, repo = build_chunks
        plugin = OutputHashPlugin(validate_output=True, validate_output_pattern=r"\.js$")
        compiler = Compiler(_options(tmp_path))

        def tamper(compilation) -> None:
            name = compilation.chunks[0].files[0]
            compilation.assets[name].emitted_path.write_text("edited", encoding="utf-8")

        # tapped first, so it runs between emission and validation
        compiler.hooks.tap(HookStage.AFTER_EMIT, "Tamper", tamper)
        compiler.apply(plugin)

        with pytest.raises(HookExecutionError) as exc_info:
            compiler.run(chunks, repo)
        assert isinstance(exc_info.value.__cause__, ValidationMismatchError)
        assert [m.asset_name for m in plugin.validation.mismatches] == [chunks[0].files[0]]

    def test_bad_hash_function_fails_build(self, build_chunks):
        chunks, repo = build_chunks
        compiler = Compiler(OutputOptions(hash_function="not-a-digest"))
        compiler.apply(OutputHashPlugin())
        with pytest.raises(HookExecutionError) as exc_info:
            compiler.run(chunks, repo)
        assert isinstance(exc_info.value.__cause__, ConfigurationError)
        # nothing renamed
        assert "a.ABCDEFGH.js" in repo

    def test_plugin_reused_across_runs(self):
        plugin = OutputHashPlugin()
        compiler = Compiler(_options())
        compiler.apply(plugin)
        for content in ("one", "two"):
            chunk = Chunk(name="a", files=["a.0000.js"], rendered_hash="0000")
            compiler.run([chunk], [Asset("a.0000.js", RawSource(content))])
            assert chunk.files[0] == f"a.{md5_short(content)}.js"
