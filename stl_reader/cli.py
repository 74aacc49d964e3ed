"""
Command line entry point: parse STL files and report what they contain.

Usage:
    stl-reader <stl_file> [<stl_file> ...] [--json] [--config CONFIG]
    stl-reader --batch <dir> [--recursive] [--parallel] [-j JOBS]

Examples:
    stl-reader part.stl
    stl-reader part.stl --json
    stl-reader --batch ./models --recursive --parallel
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from stl_reader.batch import batch_parse
from stl_reader.geometry.mesh_stats import calculate_mesh_statistics
from stl_reader.io.errors import STLFormatError, STLReadError
from stl_reader.io.stl_loader import load_stl_with_info
from stl_reader.logging_config import setup_logging
from stl_reader.project_config import ProjectConfig, load_config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FORMAT_ERROR = 1
EXIT_IO_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stl-reader",
        description="Parse ASCII and binary STL files",
    )
    parser.add_argument("files", nargs="*", help="STL files to parse")
    parser.add_argument("--batch", metavar="DIR", help="Parse every STL file in DIR")
    parser.add_argument("-r", "--recursive", action="store_true", default=None,
                        help="Search subdirectories (with --batch)")
    parser.add_argument("--parallel", action="store_true", default=None,
                        help="Parse files in parallel (with --batch)")
    parser.add_argument("-j", "--jobs", type=int, dest="max_workers",
                        help="Maximum parallel jobs")
    parser.add_argument("-c", "--config", dest="config_path",
                        help="Path to .stlreader.json config file")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-json", metavar="FILE", help="Also write JSON logs to FILE")
    return parser


def _configure_logging(args: argparse.Namespace, config: ProjectConfig) -> None:
    level = logging.DEBUG if args.verbose else config.logging.level_number
    setup_logging(
        level=level,
        json_file=args.log_json or config.logging.json_file,
        use_colors=config.logging.use_colors and sys.stderr.isatty(),
    )


def _report_file(path: str, config: ProjectConfig, as_json: bool) -> int:
    try:
        triangles, info = load_stl_with_info(path, config.reader)
    except STLReadError as e:
        print(f"{path}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except STLFormatError as e:
        print(f"{path}: {e}", file=sys.stderr)
        return EXIT_FORMAT_ERROR

    stats = calculate_mesh_statistics(triangles)
    if as_json:
        print(json.dumps({
            'file': info.filepath,
            'format': info.format.value,
            'file_size_bytes': info.file_size_bytes,
            'declared_triangles': info.declared_triangles,
            'solid_name': info.solid_name,
            'statistics': stats.to_dict(),
        }, ensure_ascii=False))
    else:
        print(f"{info.filepath} ({info.format.value}, {info.file_size_kb:.1f} KB)")
        if info.solid_name:
            print(f"Solid:        {info.solid_name}")
        if not info.count_matches:
            print(f"Declared:     {info.declared_triangles} triangles")
        print(stats.summary())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files and not args.batch:
        parser.error("give at least one STL file or --batch DIR")

    config = load_config(
        stl_path=args.batch or args.files[0],
        explicit_config=args.config_path,
    )
    _configure_logging(args, config)

    if args.batch:
        try:
            result = batch_parse(
                args.batch,
                recursive=args.recursive,
                config=config,
                parallel=args.parallel,
                max_workers=args.max_workers,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            print(str(e), file=sys.stderr)
            return EXIT_IO_ERROR
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False))
        else:
            print(result.summary())
        return EXIT_OK if result.failed == 0 else EXIT_FORMAT_ERROR

    exit_code = EXIT_OK
    for path in args.files:
        exit_code = max(exit_code, _report_file(path, config, args.json))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
