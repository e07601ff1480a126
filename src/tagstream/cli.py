from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .io import WriterSettings, read_time_tags, write_time_tags
from .io.errors import IoError
from .io.read import row_group_sizes
from .logger import configure_logging
from .sim import simulate_time_tags


def _add_logging_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level.",
    )
    p.add_argument(
        "--log-format", type=str, default="console", choices=["console", "json"], help="Log renderer."
    )


def _resolve_settings(args: argparse.Namespace) -> WriterSettings:
    """Settings precedence: CLI flags > env > TOML > defaults."""
    settings = WriterSettings.load(args.config)
    if args.max_chunk_rows is not None:
        settings = replace(settings, max_chunk_rows=args.max_chunk_rows)
    if args.max_file_rows is not None:
        settings = replace(settings, max_file_rows=args.max_file_rows)
    return settings.validate()


def _cmd_simulate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="simulate",
        description="Simulate a two-channel coincidence stream and write it as Parquet files.",
    )
    p.add_argument("--out-dir", type=str, default=".", help="Existing output directory.")
    p.add_argument("--label", type=str, default="simulation-1", help="Label used in file names.")
    p.add_argument("--pairs", type=int, default=1_000_000, help="Simulated emission pairs.")
    p.add_argument("--seed", type=int, default=42, help="Random seed.")
    p.add_argument("--max-chunk-rows", type=int, default=None, help="Rows per row group.")
    p.add_argument("--max-file-rows", type=int, default=None, help="Target rows per file.")
    p.add_argument(
        "--config", type=str, default=None, help="TOML settings file (default: tagstream.toml)."
    )
    _add_logging_args(p)
    args = p.parse_args(argv)

    configure_logging(args.log_level, args.log_format)
    try:
        settings = _resolve_settings(args)
        tags = simulate_time_tags(args.pairs, seed=args.seed)
        summary = write_time_tags(tags, args.out_dir, args.label, settings=settings)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    for f in summary.files:
        print(f"[INFO] Wrote {f.rows} rows in {f.row_groups} row groups to {f.path}")
    return 0


def _cmd_show(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="show", description="Show the head of written time tags.")
    p.add_argument("--path", type=str, required=True, help="Output file or directory.")
    p.add_argument("--n", type=int, default=5, help="Rows to display.")
    args = p.parse_args(argv)

    try:
        df = read_time_tags(args.path)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    path = Path(args.path)
    if path.is_file():
        print(f"[INFO] Row groups: {row_group_sizes(path)}")
    print(f"[INFO] Rows: {df.height}")
    print(df.head(args.n))
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tagstream", description="Time tag Parquet writer utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("simulate")
    sub.add_parser("show")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "simulate":
        code = _cmd_simulate(rest)
    elif cmd == "show":
        code = _cmd_show(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
