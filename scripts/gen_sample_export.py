#!/usr/bin/env python3
"""Sample export generator.

Generates a synthetic stock report CSV in the layout the keep-card generator
expects:
- Lines 1-21: report preamble (title, period, filter conditions ...)
- Line 22: header row
- Line 23+: data rows (drug name in column E, quantities in M/N)

Useful for trying the CLI and for manual print layout checks.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = [
    "No", "コード", "区分", "規格", "薬品名", "単位", "薬価", "メーカー",
    "在庫数", "使用量", "平均使用量", "発注点", "安全在庫数量", "MAX出庫数量",
    "処方回数", "患者数",
]
PREAMBLE_LINES = 21

DRUG_NAMES = [
    "アムロジピン錠5mg", "ロキソプロフェン錠60mg", "ランソプラゾールOD錠15mg",
    "メトホルミン錠250mg", "カルボシステイン錠500mg", "レバミピド錠100mg",
    "アセトアミノフェン錠200mg", "ファモチジン錠20mg", "クラリスロマイシン錠200mg",
    "酸化マグネシウム錠330mg",
]


def generate_rows(rows: int, seed: int = 42, zero_ratio: float = 0.2) -> pd.DataFrame:
    """Generate data rows; roughly `zero_ratio` of them get no keep quantity."""
    rng = np.random.default_rng(seed)
    safety = rng.integers(0, 200, rows)
    max_out = rng.integers(0, 300, rows)
    zero_mask = rng.random(rows) < zero_ratio
    safety[zero_mask] = 0
    max_out[zero_mask] = 0

    data = {
        "No": range(1, rows + 1),
        "コード": [f"{6100000 + i:07d}" for i in range(rows)],
        "区分": rng.choice(["内", "外", "注"], rows),
        "規格": ["1錠"] * rows,
        "薬品名": [f"{DRUG_NAMES[i % len(DRUG_NAMES)]}「{i // len(DRUG_NAMES) + 1}」" for i in range(rows)],
        "単位": ["錠"] * rows,
        "薬価": np.round(rng.uniform(5, 500, rows), 1),
        "メーカー": rng.choice(["A製薬", "B薬品", "C化学"], rows),
        "在庫数": rng.integers(0, 1000, rows),
        "使用量": rng.integers(0, 3000, rows),
        "平均使用量": np.round(rng.uniform(0, 100, rows), 1),
        "発注点": rng.integers(0, 100, rows),
        "安全在庫数量": safety,
        "MAX出庫数量": max_out,
        "処方回数": rng.integers(0, 500, rows),
        "患者数": rng.integers(0, 200, rows),
    }
    return pd.DataFrame(data, columns=HEADER)


def write_export(output_path: Path, rows: int, seed: int = 42, encoding: str = "cp932") -> None:
    df = generate_rows(rows, seed)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    preamble = ["薬品使用量集計表", "集計期間,2024/04/01,2024/06/30"]
    preamble += [f"条件{i},なし" for i in range(1, PREAMBLE_LINES - len(preamble) + 1)]

    with output_path.open("w", encoding=encoding, newline="") as f:
        for line in preamble:
            f.write(line + "\r\n")
        df.to_csv(f, index=False, lineterminator="\r\n")

    print(f"Created export: {output_path}")
    print(f"  Data rows: {rows} (+ {PREAMBLE_LINES} preamble lines + header)")
    print(f"  Rows with keep quantity > 0: {int(((df['安全在庫数量'] > 0) | (df['MAX出庫数量'] > 0)).sum())}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic stock report export")
    parser.add_argument("output", type=Path, help="Output CSV path")
    parser.add_argument("--rows", type=int, default=50, help="Number of data rows (default: 50)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--encoding", default="cp932", help="Output encoding (default: cp932)")
    args = parser.parse_args()

    if args.rows < 1:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    try:
        write_export(args.output, args.rows, args.seed, args.encoding)
    except (OSError, UnicodeEncodeError) as e:
        print(f"Error creating export: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
