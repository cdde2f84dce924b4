# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

HEADER_LINE = "No,コード,区分,規格,薬品名,単位,薬価,メーカー,在庫数,使用量,平均使用量,発注点,安全在庫数量,MAX出庫数量,処方回数,患者数"


def preamble_lines(count: int = 21) -> list[str]:
    """Report preamble occupying rows 0..20 of the parsed table."""
    lines = ["薬品使用量集計表", "集計期間,2024/04/01,2024/06/30"]
    lines += [f"条件{i},なし" for i in range(1, count - len(lines) + 1)]
    return lines[:count]


def data_line(name: str, price: str = "", safety: str = "0", max_out: str = "0",
              presc: str = "", patients: str = "") -> str:
    """Build one 16-column data line (E=name, G=price, M..P=quantities/stats)."""
    cells = [""] * 16
    cells[4] = name
    cells[6] = price
    cells[12] = safety
    cells[13] = max_out
    cells[14] = presc
    cells[15] = patients
    return ",".join(cells)


def build_export(data_lines: list[str], *, newline: str = "\n") -> str:
    return newline.join(preamble_lines() + [HEADER_LINE] + data_lines) + newline


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("KEEPCARD_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_export_text() -> str:
    return build_export([
        data_line("アムロジピン錠5mg", "10.1", "5", "8", "3", "10"),
        data_line("ロキソプロフェン錠60mg", "", "0", "0", "1", "1"),  # keep=0 -> dropped
        data_line("", "12.0", "4", "4"),  # no name -> dropped
        data_line("レバミピド錠100mg", "10.2", "120", "abc", "", "7"),
    ])


@pytest.fixture()
def write_export(temp_workdir: Path):
    def _write(name: str, text: str, encoding: str = "cp932") -> Path:
        path = temp_workdir / "data" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """encoding: cp932
output_directory: ./out
log_directory: ./logs
document_title: 4月 キープカード
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "keepcard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def propagate_logs(monkeypatch):
    """Let caplog see records even after setup_logging() disabled propagation."""
    import logging
    monkeypatch.setattr(logging.getLogger("keepcard"), "propagate", True)
