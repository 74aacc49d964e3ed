"""
Batch parsing of STL files in a directory.

Provides:
- Folder-based file discovery
- Per-file result with I/O vs format error classification
- Optional thread-pool parallelism (each parse call is independent)

Usage:
    from stl_reader.batch import batch_parse

    results = batch_parse("./models", recursive=True, parallel=True)
    print(results.summary())
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from stl_reader.io.errors import STLFormatError, STLReadError
from stl_reader.io.stl_loader import load_stl_with_info
from stl_reader.project_config import ProjectConfig, load_config

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, "ParseResult"], None]


@dataclass
class ParseResult:
    """Result of parsing a single file."""
    input_path: Path
    success: bool = False
    format: Optional[str] = None
    n_triangles: int = 0
    error: Optional[str] = None
    error_kind: Optional[str] = None  # "io" or "format"
    duration_seconds: float = 0.0

    @property
    def status(self) -> str:
        return "OK" if self.success else "FAILED"


@dataclass
class BatchResult:
    """Result of a batch run."""
    results: List[ParseResult] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def total_triangles(self) -> int:
        return sum(r.n_triangles for r in self.results if r.success)

    @property
    def success_rate(self) -> float:
        """Success rate as percentage."""
        if self.total == 0:
            return 0.0
        return 100.0 * self.successful / self.total

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Batch Parse Summary",
            "=" * 40,
            f"Total files:     {self.total}",
            f"Successful:      {self.successful}",
            f"Failed:          {self.failed}",
            f"Triangles:       {self.total_triangles}",
            f"Success rate:    {self.success_rate:.1f}%",
            f"Total time:      {self.total_duration_seconds:.1f}s",
            "",
        ]

        if self.failed > 0:
            lines.append("Failed files:")
            for r in self.results:
                if not r.success:
                    lines.append(f"  - {r.input_path.name} [{r.error_kind}]: {r.error}")

        return "\n".join(lines)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
            'total_triangles': self.total_triangles,
            'success_rate': self.success_rate,
            'total_duration_seconds': self.total_duration_seconds,
            'results': [
                {
                    'input': str(r.input_path),
                    'success': r.success,
                    'format': r.format,
                    'triangles': r.n_triangles,
                    'error': r.error,
                    'error_kind': r.error_kind,
                    'duration': r.duration_seconds,
                }
                for r in self.results
            ],
        }


def find_stl_files(
    input_dir: Union[str, Path],
    pattern: str = "*.stl",
    recursive: bool = False,
) -> List[Path]:
    """Find STL files in a directory.

    Upper-case ``.STL`` extensions are matched as well.

    Raises:
        FileNotFoundError: if input_dir does not exist
        NotADirectoryError: if input_dir is not a directory
    """
    input_dir = Path(input_dir)

    if not input_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    if not input_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {input_dir}")

    glob = input_dir.rglob if recursive else input_dir.glob
    files = set(glob(pattern))
    files.update(glob(pattern.replace('.stl', '.STL')))
    files = sorted(f for f in files if f.is_file())

    logger.info("Found %d STL files in %s", len(files), input_dir)
    return files


def parse_single_file(
    input_path: Path,
    config: Optional[ProjectConfig] = None,
) -> ParseResult:
    """Parse one file, capturing reader errors in the result."""
    start_time = time.perf_counter()
    result = ParseResult(input_path=input_path)
    reader_config = config.reader if config else None

    try:
        triangles, info = load_stl_with_info(input_path, reader_config)
        result.success = True
        result.format = info.format.value
        result.n_triangles = len(triangles)
    except STLReadError as e:
        result.error = str(e)
        result.error_kind = "io"
        logger.error("Cannot read %s: %s", input_path.name, e)
    except STLFormatError as e:
        result.error = str(e)
        result.error_kind = "format"
        logger.error("Invalid STL %s: %s", input_path.name, e)

    result.duration_seconds = time.perf_counter() - start_time
    return result


def batch_parse(
    input_dir: Union[str, Path],
    pattern: Optional[str] = None,
    recursive: Optional[bool] = None,
    config: Optional[ProjectConfig] = None,
    config_path: Optional[Union[str, Path]] = None,
    parallel: Optional[bool] = None,
    max_workers: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchResult:
    """Parse every STL file in a directory.

    Arguments left as None take their value from the batch section of the
    configuration.

    Args:
        input_dir: Directory containing STL files
        pattern: Glob pattern for STL files
        recursive: Search subdirectories
        config: Project configuration
        config_path: Path to .stlreader.json config file
        parallel: Parse files on a thread pool
        max_workers: Maximum parallel workers (None = executor default)
        progress_callback: Called after each file: (current, total, result)

    Returns:
        BatchResult with per-file results in path order
    """
    start_time = time.perf_counter()
    input_dir = Path(input_dir)

    if config is None:
        config = load_config(stl_path=input_dir, explicit_config=config_path)

    pattern = pattern if pattern is not None else config.batch.pattern
    recursive = recursive if recursive is not None else config.batch.recursive
    parallel = parallel if parallel is not None else config.batch.parallel
    max_workers = max_workers if max_workers is not None else config.batch.max_workers

    stl_files = find_stl_files(input_dir, pattern, recursive)

    if not stl_files:
        logger.warning("No STL files found in %s", input_dir)
        return BatchResult(total_duration_seconds=time.perf_counter() - start_time)

    logger.info("Starting batch parse: %d files, parallel=%s", len(stl_files), parallel)

    results: List[ParseResult] = []

    def _record(i: int, result: ParseResult) -> None:
        results.append(result)
        if progress_callback:
            progress_callback(i, len(stl_files), result)
        logger.info(
            "[%d/%d] %s: %s (%.2fs)",
            i, len(stl_files), result.input_path.name,
            result.status, result.duration_seconds,
        )

    if parallel:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(parse_single_file, f, config) for f in stl_files]
            for i, future in enumerate(as_completed(futures), 1):
                _record(i, future.result())
        results.sort(key=lambda r: r.input_path)
    else:
        for i, stl_file in enumerate(stl_files, 1):
            _record(i, parse_single_file(stl_file, config))

    batch_result = BatchResult(
        results=results,
        total_duration_seconds=time.perf_counter() - start_time,
    )

    logger.info(
        "Batch parse complete: %d/%d successful (%.1f%%) in %.1fs",
        batch_result.successful, batch_result.total,
        batch_result.success_rate, batch_result.total_duration_seconds,
    )
    return batch_result
