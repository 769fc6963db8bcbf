"""Configuration management for minishell.

Loads YAML settings (settings.yaml) and environment variables (.env)
from the config directory into a Config object. Property getters
provide safe access with defaults for the shell name, title, history
and logging.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Singleton accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger("minishell")

CONFIG_DIR_ENV = "MINISHELL_CONFIG_DIR"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_dir() -> Path:
    configured = os.environ.get(CONFIG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".minishell"


class Config:
    """Central configuration manager for minishell.

    Args:
        config_dir: Directory holding settings.yaml and .env. Defaults
            to ``$MINISHELL_CONFIG_DIR`` or ``~/.minishell``. A missing
            directory simply yields the defaults.

    Raises:
        ConfigurationError: If settings.yaml exists but is not valid YAML
            or not a mapping.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = default_config_dir()
        self.config_dir = Path(config_dir)

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse {filepath}", setting_name=filename, error=str(e)
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{filepath} must contain a mapping", setting_name=filename
            )
        return data

    def validate(self):
        """Validate settings at startup.

        Logs errors for values of the wrong type but does not raise;
        the property getters fall back to defaults for them.
        """
        for key in ("shell_name", "title"):
            value = self.settings.get(key)
            if value is not None and not isinstance(value, str):
                logger.error("config_invalid_value", key=key, type=type(value).__name__)

        log_config = self.settings.get("logging", {})
        if not isinstance(log_config, dict):
            logger.error("config_invalid_value", key="logging", type=type(log_config).__name__)
            return
        for key in ("level", "console_level"):
            level = log_config.get(key)
            if level is not None and str(level).upper() not in _LOG_LEVELS:
                logger.error("config_invalid_value", key=f"logging.{key}", value=level)
        for subsystem, level in (log_config.get("subsystem_levels") or {}).items():
            if str(level).upper() not in _LOG_LEVELS:
                logger.error(
                    "config_invalid_value",
                    key=f"logging.subsystem_levels.{subsystem}",
                    value=level,
                )

    def _logging_section(self) -> dict:
        section = self.settings.get("logging", {})
        return section if isinstance(section, dict) else {}

    @property
    def shell_name(self) -> str:
        """Shell name used in banners and the prompt (default "minishell")."""
        name = self.settings.get("shell_name")
        if isinstance(name, str) and name.strip():
            return name.strip()
        return "minishell"

    @property
    def title(self) -> str:
        """Banner printed once when a shell mode starts (default none)."""
        title = self.settings.get("title", "")
        return title if isinstance(title, str) else ""

    @property
    def history_file(self) -> Optional[Path]:
        """Interactive history file. ``history: false`` disables persistence."""
        configured = self.settings.get("history", True)
        if configured is False:
            return None
        if isinstance(configured, str) and configured:
            return Path(configured).expanduser()
        return self.config_dir / "history"

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for rotating log files; None means console-only."""
        configured = self.settings.get("log_dir") or os.environ.get("MINISHELL_LOG_DIR")
        if configured:
            return Path(configured).expanduser()
        return None

    @property
    def logging_level(self) -> str:
        """Level for log files (default INFO)."""
        return str(self._logging_section().get("level", "INFO"))

    @property
    def logging_console_level(self) -> str:
        """Level for the stderr console handler (default WARNING)."""
        return str(self._logging_section().get("console_level", "WARNING"))

    @property
    def logging_subsystem_levels(self) -> dict:
        """Per-subsystem log level overrides. E.g. {"dispatch": "DEBUG"}."""
        return self._logging_section().get("subsystem_levels") or {}

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        return self._logging_section().get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        return self._logging_section().get("backup_count", 5)


_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
