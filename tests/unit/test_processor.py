"""Unit tests for ConversionProcessor."""

from __future__ import annotations

from pathlib import Path

import pytest

from ts2js.exceptions import TargetNotFoundError
from ts2js.run_config import ConversionConfig


def test_convert_file_missing_target_raises(tmp_path: Path, make_processor) -> None:
    processor = make_processor()

    with pytest.raises(TargetNotFoundError, match="File not found"):
        processor.convert_file(tmp_path / "nope.ts")


def test_convert_file_success(tmp_path: Path, make_processor) -> None:
    source = tmp_path / "one.ts"
    source.write_text("let one: number = 1;\n", encoding="utf-8")

    result = make_processor().convert_file(str(source))

    assert result is not None and result.succeeded
    assert (tmp_path / "one.js").read_text(encoding="utf-8") == "let one = 1;\n"


def test_convert_file_unsupported_returns_none(tmp_path: Path, make_processor) -> None:
    source = tmp_path / "style.css"
    source.write_text("a {}", encoding="utf-8")

    assert make_processor().convert_file(source) is None
    assert source.exists()


def test_convert_directory_uses_injected_config(write_tree, make_processor) -> None:
    root = write_tree({"a.ts": "let a = 1;\n", "vendor/b.ts": "let b = 1;\n"})
    processor = make_processor(config=ConversionConfig(ignored_dirs=frozenset({"vendor"})))

    stats = processor.convert_directory(root)

    assert (stats.success_count, stats.failure_count) == (1, 0)
    assert (root / "vendor/b.ts").exists()


def test_processor_reads_env_when_config_omitted(monkeypatch: pytest.MonkeyPatch, fake_engine, memory_fs) -> None:
    from ts2js.processor import ConversionProcessor

    monkeypatch.setenv("TS2JS_WORKERS", "2")

    processor = ConversionProcessor(engine=fake_engine, file_system=memory_fs)

    assert processor.config.workers == 2
