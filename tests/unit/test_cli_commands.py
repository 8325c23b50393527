"""Unit tests for the CLI — command registration and behavior via CliRunner."""

from __future__ import annotations

import hashlib
from pathlib import Path

from typer.testing import CliRunner

from outhash.cli.app import app

runner = CliRunner()

ENTRY_JS = "console.log('entry');"


def _md5(data: str, length: int = 8) -> str:
    return hashlib.md5(data.encode("utf-8")).hexdigest()[:length]


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "rehash" in result.output
        assert "verify" in result.output
        assert "digest" in result.output


# ---------------------------------------------------------------------------
# Test: rehash
# ---------------------------------------------------------------------------


class TestRehashCommand:
    def test_in_place(self, build_dir: Path):
        result = runner.invoke(
            app,
            ["rehash", str(build_dir), "--index", "vendor", "--index", "index.html",
             "--hash-length", "8"],
        )
        assert result.exit_code == 0, result.output

        entry_name = f"entry.{_md5(ENTRY_JS)}.js"
        names = sorted(p.name for p in build_dir.iterdir())
        assert entry_name in names
        assert "entry.0123abcd.js" not in names
        assert "vendor.89abcdef.js" not in names
        assert "index.html" in names

        vendor = next(p for p in build_dir.iterdir() if p.name.startswith("vendor."))
        content = vendor.read_text(encoding="utf-8")
        assert entry_name in content
        assert vendor.name == f"vendor.{_md5(content)}.js"

        html = (build_dir / "index.html").read_text(encoding="utf-8")
        assert html == f'<script src="{vendor.name}"></script>'

    def test_unhashed_names_left_alone(self, tmp_path: Path):
        (tmp_path / "jquery.cafe.js").write_text("jquery", encoding="utf-8")
        result = runner.invoke(app, ["rehash", str(tmp_path)])
        assert result.exit_code == 0
        assert (tmp_path / "jquery.cafe.js").exists()

    def test_out_dir_leaves_source_untouched(self, build_dir: Path, tmp_path: Path):
        out = tmp_path / "rehashed"
        result = runner.invoke(
            app,
            ["rehash", str(build_dir), "--out", str(out), "--hash-length", "8", "--validate",
             "--pattern", r"\.js$"],
        )
        assert result.exit_code == 0, result.output
        assert (build_dir / "entry.0123abcd.js").exists()
        assert len(list(out.iterdir())) == 3

    def test_no_chunks(self, tmp_path: Path):
        (tmp_path / "index.html").write_text("<html>", encoding="utf-8")
        result = runner.invoke(app, ["rehash", str(tmp_path)])
        assert result.exit_code == 0
        assert "No hashed chunk files" in result.output

    def test_bad_hash_function(self, build_dir: Path):
        result = runner.invoke(app, ["rehash", str(build_dir), "--hash-function", "nope"])
        assert result.exit_code == 1
        assert "Rehash failed" in result.output
        assert (build_dir / "entry.0123abcd.js").exists()

    def test_missing_dir(self, tmp_path: Path):
        result = runner.invoke(app, ["rehash", str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_zero_hash_length(self, build_dir: Path):
        result = runner.invoke(app, ["rehash", str(build_dir), "--hash-length", "0"])
        assert result.exit_code == 1
        assert "Invalid settings" in result.output


# ---------------------------------------------------------------------------
# Test: verify and digest
# ---------------------------------------------------------------------------


class TestVerifyCommand:
    def test_stale_build_fails(self, build_dir: Path):
        result = runner.invoke(app, ["verify", str(build_dir), "--pattern", r"\.js$"])
        assert result.exit_code == 1
        assert "STALE" in result.output

    def test_rehashed_build_passes(self, build_dir: Path):
        runner.invoke(app, ["rehash", str(build_dir), "--index", "vendor", "--hash-length", "8"])
        result = runner.invoke(
            app, ["verify", str(build_dir), "--pattern", r"\.js$", "--hash-length", "8"]
        )
        assert result.exit_code == 0, result.output

    def test_bad_pattern(self, build_dir: Path):
        result = runner.invoke(app, ["verify", str(build_dir), "--pattern", "("])
        assert result.exit_code == 1


class TestDigestCommand:
    def test_prints_short_digest(self, tmp_path: Path):
        path = tmp_path / "file.txt"
        path.write_text("X", encoding="utf-8")
        result = runner.invoke(app, ["digest", str(path), "--hash-length", "8"])
        assert result.exit_code == 0
        assert _md5("X") in result.output

    def test_full_digest(self, tmp_path: Path):
        path = tmp_path / "file.txt"
        path.write_text("X", encoding="utf-8")
        result = runner.invoke(app, ["digest", str(path), "--full"])
        assert hashlib.md5(b"X").hexdigest() in result.output

    def test_not_a_file(self, tmp_path: Path):
        result = runner.invoke(app, ["digest", str(tmp_path)])
        assert result.exit_code == 1
