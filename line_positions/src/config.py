"""
Configuration management for line-positions.

Handles loading, saving, and validating configuration settings for the
command line. The library API takes its options as arguments and never
reads configuration itself.

Precedence, lowest first: dataclass defaults, .line-positions/config.yaml,
LINE_POSITIONS_* environment variables (a .env file in the project root is
loaded into the environment first), command-line flags.
"""

import codecs
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from ..utils.logger_setup import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "LINE_POSITIONS"

OUTPUT_FORMATS = ['text', 'json']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def parse_bool(value: Any) -> bool:
    """Interpret a YAML or environment value as a boolean."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


@dataclass
class IndexConfig:
    """How texts are indexed."""
    strip_cr: bool = False

    def __post_init__(self):
        """Apply environment overrides."""
        strip_cr = os.getenv(f"{ENV_PREFIX}_STRIP_CR")
        if strip_cr is not None:
            self.strip_cr = strip_cr
        self.strip_cr = parse_bool(self.strip_cr)


@dataclass
class OutputConfig:
    """How files are read and results printed."""
    format: str = "text"  # text, json
    encoding: str = "utf-8"
    chars: bool = False  # count code points instead of bytes

    def __post_init__(self):
        """Apply environment overrides."""
        # null or numeric YAML values become strings so validate() can report them
        self.format = str(os.getenv(f"{ENV_PREFIX}_FORMAT", self.format))
        self.encoding = str(os.getenv(f"{ENV_PREFIX}_ENCODING", self.encoding))

        chars = os.getenv(f"{ENV_PREFIX}_CHARS")
        if chars is not None:
            self.chars = chars
        self.chars = parse_bool(self.chars)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    file: Optional[str] = None

    def __post_init__(self):
        """Apply environment overrides."""
        self.level = str(os.getenv(f"{ENV_PREFIX}_LOG_LEVEL", self.level))

        log_file = os.getenv(f"{ENV_PREFIX}_LOG_FILE")
        if log_file:  # Only set if env var is not empty
            self.file = log_file


@dataclass
class Config:
    """Main configuration class."""
    index: IndexConfig = field(default_factory=IndexConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary."""
        return cls(
            index=IndexConfig(**(data.get('index') or {})),
            output=OutputConfig(**(data.get('output') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            'index': asdict(self.index),
            'output': asdict(self.output),
            'logging': asdict(self.logging),
        }


class ConfigManager:
    """Manages configuration loading, saving, and resolution."""

    DEFAULT_CONFIG_DIR = ".line-positions"
    DEFAULT_CONFIG_FILE = "config.yaml"
    ENV_FILE = ".env"

    def __init__(self, project_root: Optional[str] = None):
        """
        Initialize ConfigManager.

        Args:
            project_root: Root directory of the project. If None, uses current directory.
        """
        self.project_root = Path(project_root or os.getcwd())
        self.config_dir = self.project_root / self.DEFAULT_CONFIG_DIR
        self.config_file = self.config_dir / self.DEFAULT_CONFIG_FILE
        self.env_file = self.project_root / self.ENV_FILE

    def load(self) -> Config:
        """
        Load configuration from file or create default.

        Returns:
            Loaded or default configuration
        """
        if self.env_file.exists():
            load_dotenv(self.env_file)

        if self.config_file.exists():
            return self._load_from_file()
        return Config()

    def _load_from_file(self) -> Config:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")

            data = self._resolve_env_vars(data)
            return Config.from_dict(data)
        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            logger.warning(f"Error loading config file {self.config_file}: {e}")
            logger.info("Using default configuration.")
            return Config()

    def save(self, config: Config):
        """
        Save configuration to file.

        Args:
            config: Configuration to save
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    def init_config(self, overwrite: bool = False) -> bool:
        """
        Initialize configuration file with defaults.

        Args:
            overwrite: Whether to overwrite existing config

        Returns:
            True if config was created/updated, False otherwise
        """
        if self.config_file.exists() and not overwrite:
            logger.info(f"Configuration already exists at: {self.config_file}")
            return False

        if overwrite and self.config_file.exists():
            self.config_file.unlink()
            logger.info("Removed existing configuration file")

        self.save(Config())

        logger.info(f"Configuration initialized at: {self.config_file}")
        return True

    def _resolve_env_vars(self, data: Any) -> Any:
        """
        Recursively resolve environment variables in configuration.

        Supports ${VAR_NAME} syntax.
        """
        if isinstance(data, dict):
            return {k: self._resolve_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):
            if data.startswith('${') and data.endswith('}'):
                var_name = data[2:-1]
                return os.environ.get(var_name, data)
        return data

    def validate(self, config: Config) -> List[str]:
        """
        Validate configuration.

        Args:
            config: Configuration to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if config.output.format not in OUTPUT_FORMATS:
            errors.append(f"Invalid output format: {config.output.format}")

        try:
            codecs.lookup(config.output.encoding)
        except (LookupError, TypeError):
            errors.append(f"Unknown encoding: {config.output.encoding}")

        if str(config.logging.level).upper() not in LOG_LEVELS:
            errors.append(f"Invalid log level: {config.logging.level}")

        return errors

    def cleanup(self) -> bool:
        """
        Remove configuration directory and all its contents.

        Returns:
            True if cleanup was successful, False otherwise
        """
        if not self.config_dir.exists():
            logger.info(f"No configuration found at: {self.config_dir}")
            return False

        import shutil

        # Close file handlers first so the log file can be removed (Windows)
        root_logger = logging.getLogger('line_positions')
        for handler in root_logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                handler.close()
                root_logger.removeHandler(handler)

        shutil.rmtree(self.config_dir)
        return True
