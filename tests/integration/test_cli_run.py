from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import HEADER_LINE, build_export, data_line, preamble_lines
from keepcard.cli import main as cli_main
from keepcard.logging.init import reset_logging
from keepcard.table.reader import read_export


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_cli_single_export_success(write_export, temp_workdir: Path, capsys):
    lines = [data_line(f"薬品{i}", "10", str(i + 1), "0", "2", "1") for i in range(20)]
    path = write_export("stock.csv", build_export(lines))

    code = cli_main([str(path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "20枚のカードを生成しました（2ページ）" in out
    assert "SUMMARY files=1/1 success=1 failed=0 cards=20 pages=2" in out
    html = (temp_workdir / "output" / "stock.html").read_text(encoding="utf-8")
    assert html.count('<section class="page"') == 2
    assert html.count('class="card empty"') == 12
    assert not (temp_workdir / "logs").exists()


def test_cli_uses_config_output_and_title(write_config, write_export, temp_workdir: Path, sample_export_text: str):
    path = write_export("stock.csv", sample_export_text)

    code = cli_main([str(path), "--export-csv"])

    assert code == 0
    html = (temp_workdir / "out" / "stock.html").read_text(encoding="utf-8")
    assert "<title>4月 キープカード</title>" in html
    assert (temp_workdir / "out" / "stock.items.csv").exists()


def test_cli_partial_failure_writes_error_log(write_export, temp_workdir: Path, sample_export_text: str, capsys):
    good = write_export("good.csv", sample_export_text)
    short = write_export("short.csv", "\n".join(preamble_lines() + [HEADER_LINE]))
    zero = write_export("zero.csv", build_export([data_line("A")]))

    code = cli_main([str(good), str(short), str(zero)])

    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR short.csv: CSVファイルにデータがありません" in out
    assert "ERROR zero.csv: 有効なデータがありません" in out
    assert "SUMMARY files=3/3 success=1 failed=2 cards=2 pages=1" in out
    assert (temp_workdir / "output" / "good.html").exists()
    assert not (temp_workdir / "output" / "short.html").exists()

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    records = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["error_type"]) for r in records] == [
        ("short.csv", "INSUFFICIENT_ROWS"),
        ("zero.csv", "NO_QUALIFYING_DATA"),
    ]


def test_cli_read_failure(temp_workdir: Path, capsys):
    code = cli_main([str(temp_workdir / "data" / "missing.csv")])
    out = capsys.readouterr().out
    assert code == 2
    assert "エラーが発生しました: file not found" in out


def test_cli_encoding_override(write_export, temp_workdir: Path, sample_export_text: str):
    path = write_export("utf8.csv", sample_export_text, encoding="utf-8")
    assert cli_main([str(path), "--encoding", "utf-8", "--output-dir", "cards"]) == 0
    assert (temp_workdir / "cards" / "utf8.html").exists()


def test_cli_inspect_data(write_export, sample_export_text: str, capsys):
    path = write_export("stock.csv", sample_export_text)
    code = cli_main([str(path), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: stock.csv" in out
    assert "rows=26" in out
    assert "安全在庫数量" in out
    assert "keep_quantity" in out
    assert "2枚のカードを生成しました（1ページ）" in out


def test_cli_config_from_env(monkeypatch, write_export, temp_workdir: Path, sample_export_text: str):
    cfg = temp_workdir / "config" / "alt.yml"
    cfg.write_text("output_directory: ./env_out\n", encoding="utf-8")
    monkeypatch.setenv("KEEPCARD_CONFIG", str(cfg))
    path = write_export("stock.csv", sample_export_text)
    assert cli_main([str(path)]) == 0
    assert (temp_workdir / "env_out" / "stock.html").exists()


def test_cli_same_stem_exports_do_not_overwrite(write_export, temp_workdir: Path, capsys):
    first = write_export("a/stock.csv", build_export([data_line("東病棟薬", safety="2")]))
    second = write_export("b/stock.csv", build_export([data_line("西病棟薬", max_out="3")]))

    code = cli_main([str(first), str(second), "--export-csv"])

    out = capsys.readouterr().out
    assert code == 0
    assert "WARN" in out and "stock-2.html" in out
    output = temp_workdir / "output"
    assert "東病棟薬" in (output / "stock.html").read_text(encoding="utf-8")
    assert "西病棟薬" in (output / "stock-2.html").read_text(encoding="utf-8")
    assert (output / "stock.items.csv").exists()
    assert (output / "stock-2.items.csv").exists()


def test_cli_inspect_data_reads_each_export_once(write_export, sample_export_text: str, capsys):
    path = write_export("stock.csv", sample_export_text)
    with patch("keepcard.cli.__main__.read_export", wraps=read_export) as spy, \
            patch("keepcard.cli.__main__.generate_from_file") as from_file:
        code = cli_main([str(path), "--inspect-data"])

    capsys.readouterr()
    assert code == 0
    assert spy.call_count == 1
    from_file.assert_not_called()
