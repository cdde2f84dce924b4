from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from keepcard.config.loader import AppConfig, ConfigError, load_config
from keepcard.logging.error_log import ErrorLogBuffer, ErrorRecord
from keepcard.logging.init import log_summary, setup_logging
from keepcard.models.generation_result import GenerationSuccess, SessionState
from keepcard.models.processing_result import FileStat, RunResult, file_stat_from_result
from keepcard.render.html import write_document
from keepcard.services.export import items_to_frame, write_items_csv
from keepcard.services.generator import generate, generate_from_file
from keepcard.services.progress import ProgressTracker
from keepcard.services.summary import render_status_message, render_summary_line
from keepcard.table.parser import parse_table
from keepcard.table.reader import ExportReadError, read_export

"""CLI entrypoint.

Flow:
- load .env, then config (KEEPCARD_CONFIG / --config / config/keepcard.yml)
- run one generation cycle per export file, in argument order
- write <stem>.html (and <stem>.items.csv with --export-csv) per success;
  a stem already written in the same run gets a -2, -3 ... suffix
- append failures (including unwritable outputs) to the JSON Lines error log
- print the SUMMARY line and return the exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3

# error_type for sheets that were generated but could not be written
WRITE_FAILURE = "WRITE_FAILURE"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="keepcard", description="Stock report CSV -> printable keep cards")
    p.add_argument("files", nargs="*", type=Path, help="Export CSV files")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for generated sheets")
    p.add_argument("--encoding", default=None, help="Export file encoding (default from config)")
    p.add_argument("--export-csv", action="store_true", help="Also write the derived keep list as CSV")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header, sample rows and derived items then exit")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path | None:
    if args.config is not None:
        return args.config
    env_path = os.getenv("KEEPCARD_CONFIG")
    return Path(env_path) if env_path else None


def _inspect_data(files: list[Path], cfg: AppConfig, encoding: str) -> int:
    layout = cfg.layout
    for f in files:
        print(f"FILE: {f.name}")
        try:
            text = read_export(f, encoding)
        except ExportReadError as e:
            print(f"  read_error: {e}")
            continue
        rows = parse_table(text)
        print(f"  rows={len(rows)}")
        if len(rows) > layout.header_row_index:
            print(f"  header={rows[layout.header_row_index]}")
            sample = rows[layout.header_row_index + 1:layout.header_row_index + 1 + INSPECT_SAMPLE_ROWS]
            print("  sample_rows=", sample)
        result, _ = generate(text, SessionState.empty(), source=f.name, layout=layout)
        if isinstance(result, GenerationSuccess):
            print(items_to_frame(result.items).head(INSPECT_SAMPLE_ROWS).to_string(index=False))
        print(f"  status: {render_status_message(result)}")
    return EXIT_SUCCESS_ALL


def _output_stem(path: Path, used: set[str]) -> str:
    """Return a stem not yet written in this run (stock, stock-2, stock-3 ...)."""
    stem = path.stem
    n = 2
    while stem.lower() in used:
        stem = f"{path.stem}-{n}"
        n += 1
    used.add(stem.lower())
    return stem


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] はそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    logger = setup_logging(logging.DEBUG if args.debug else logging.INFO)
    if args.debug:
        logger.debug("debug mode enabled")
    load_dotenv(dotenv_path=Path(".env"), override=False)

    try:
        cfg = load_config(_resolve_config_path(args))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    encoding = args.encoding or cfg.encoding
    output_dir = args.output_dir or Path(cfg.output_directory)

    if args.inspect_data:
        return _inspect_data(args.files, cfg, encoding)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"output directory unusable: {output_dir} ({e})")
        return EXIT_FATAL
    logger.info(f"Writing cards to: {output_dir}")

    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(cfg.log_directory))
    state = SessionState.empty()
    file_stats: list[FileStat] = []
    used_stems: set[str] = set()

    with ProgressTracker(len(args.files)) as progress:
        for path in args.files:
            progress.start_file(path)
            result, state = generate_from_file(path, state, encoding=encoding, layout=cfg.layout)
            message = render_status_message(result)
            if isinstance(result, GenerationSuccess):
                stem = _output_stem(path, used_stems)
                if stem != path.stem:
                    logger.warning(f"{path}: output name already used in this run, writing {stem}.html")
                try:
                    out = write_document(result.pages, output_dir / f"{stem}.html", title=cfg.document_title)
                    if args.export_csv:
                        write_items_csv(result.items, output_dir / f"{stem}.items.csv")
                except OSError as e:
                    logger.error(f"{path.name}: 出力ファイルを書き込めません: {e}")
                    error_log.append(ErrorRecord.create(path.name, WRITE_FAILURE, str(e)))
                    file_stats.append(FileStat(
                        file_name=path.name, status="failed", cards=0, pages=0, error_type=WRITE_FAILURE,
                    ))
                else:
                    logger.info(f"{path.name}: {message} -> {out}")
                    file_stats.append(file_stat_from_result(path.name, result, str(out)))
            else:
                logger.error(f"{path.name}: {message}")
                error_log.append(ErrorRecord.create(path.name, result.kind.error_type, result.message))
                file_stats.append(file_stat_from_result(path.name, result))
            progress.finish_file(cards=file_stats[-1].cards)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    run = RunResult(start_time=start_time, end_time=datetime.now(UTC), file_stats=file_stats)
    # log_summary adds the "SUMMARY " prefix
    log_summary(render_summary_line(run)[len("SUMMARY "):])

    if run.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
