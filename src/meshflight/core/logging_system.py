"""Logging setup for MeshFlight.

Thin layer over the standard logging module. Modules obtain loggers with
get_logger(__name__); the application calls initialize_logging() once at
startup, optionally with a YAML dictConfig file.

Typical usage:
    from meshflight.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    logger = get_logger(__name__)
    logger.info("Simulation ready")
"""

import logging
import logging.config
import os
import platform
from pathlib import Path

import yaml

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_initialized = False


def get_log_directory(app_name: str = "meshflight") -> Path:
    """Get the platform-specific directory for log files.

    Args:
        app_name: Application name used as the directory name.

    Returns:
        Path to the log directory (not created).
    """
    system = platform.system()
    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / app_name
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA", str(Path.home()))
        return Path(base) / app_name / "logs"
    state_home = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    return Path(state_home) / app_name / "logs"


def _redirect_file_handlers(config: dict, log_dir: Path) -> None:
    """Rewrite relative file handler paths to live under log_dir."""
    for handler in config.get("handlers", {}).values():
        filename = handler.get("filename")
        if filename and not Path(filename).is_absolute():
            log_dir.mkdir(parents=True, exist_ok=True)
            handler["filename"] = str(log_dir / filename)


def initialize_logging(
    config_path: str | None = None,
    use_platform_dir: bool = False,
    level: int = logging.INFO,
) -> None:
    """Configure logging for the application.

    Args:
        config_path: Optional path to a YAML file in logging dictConfig format.
        use_platform_dir: If True, relative log file paths in the config are
            placed in the platform log directory.
        level: Root level used when no config file is given.
    """
    global _initialized

    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        if use_platform_dir:
            _redirect_file_handlers(config, get_log_directory())
        config.setdefault("version", 1)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)

    _initialized = True
    logging.getLogger(__name__).debug("Logging initialized (config=%s)", config_path)


def is_initialized() -> bool:
    """Return True once initialize_logging() has run."""
    return _initialized


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Logger name, usually __name__.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
