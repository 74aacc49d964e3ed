"""
JSON-based project configuration for stl_reader.

Configuration is looked up in:
1. Explicit config file path (CLI ``--config``)
2. .stlreader.json in the STL file's directory
3. .stlreader.json in the current directory
4. ~/.stlreader.json

Example .stlreader.json:
{
    "reader": {
        "context_chars": 64,
        "text_errors": "replace"
    },
    "logging": {
        "level": "DEBUG",
        "json_file": "stl_reader.log.json"
    },
    "batch": {
        "pattern": "*.stl",
        "recursive": true,
        "parallel": true,
        "max_workers": 4
    }
}
"""

import codecs
import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from stl_reader.io.ascii_reader import CONTEXT_CHARS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".stlreader.json"


@dataclass
class ReaderConfig:
    """Decoder settings."""
    context_chars: int = CONTEXT_CHARS  # text kept on each side of an ASCII syntax error
    text_errors: str = "replace"  # codec error handler for ASCII content

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: if context_chars is not a non-negative integer or
                text_errors is not a registered codec error handler
        """
        if (isinstance(self.context_chars, bool)
                or not isinstance(self.context_chars, int)
                or self.context_chars < 0):
            raise ValueError(
                f"context_chars must be a non-negative integer, got {self.context_chars!r}"
            )
        try:
            codecs.lookup_error(self.text_errors)
        except (LookupError, TypeError) as e:
            raise ValueError(f"Unknown text_errors handler: {self.text_errors!r}") from e


@dataclass
class LoggingConfig:
    """Logging settings applied by the command line."""
    level: str = "INFO"
    json_file: Optional[str] = None
    use_colors: bool = True

    @property
    def level_number(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass
class BatchConfig:
    """Directory parsing settings."""
    pattern: str = "*.stl"
    recursive: bool = False
    parallel: bool = False
    max_workers: Optional[int] = None


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from dictionary.

        Unknown sections and keys are ignored. Reader values that fail
        validation are logged and replaced by their defaults.
        """
        config = cls()

        for section in ('reader', 'logging', 'batch'):
            target = getattr(config, section)
            for key, value in (data.get(section) or {}).items():
                if not hasattr(target, key):
                    logger.debug("Ignoring unknown config key %s.%s", section, key)
                    continue
                previous = getattr(target, key)
                setattr(target, key, value)
                if section == 'reader':
                    try:
                        target.validate()
                    except ValueError as e:
                        setattr(target, key, previous)
                        logger.warning("Ignoring config value %s.%s: %s", section, key, e)

        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)


def find_config_file(
    stl_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find configuration file using the search hierarchy.

    Args:
        stl_path: Path to STL file (or directory) being processed
        explicit_config: Explicitly specified config path

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    if stl_path:
        stl_path = Path(stl_path)
        stl_dir = stl_path if stl_path.is_dir() else stl_path.parent
        stl_config = stl_dir / CONFIG_FILENAME
        if stl_config.exists():
            return stl_config

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(
    stl_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ProjectConfig:
    """Load configuration, falling back to defaults.

    Args:
        stl_path: Path to STL file being processed
        explicit_config: Explicitly specified config path

    Returns:
        ProjectConfig instance (defaults if no usable config file found)
    """
    config_path = find_config_file(stl_path, explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()
