"""Logging configuration using Loguru."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from floodvision.utils.config import get_project_root, settings

SOURCES_MODULE = "floodvision.data_sources"


def _from_data_sources(record) -> bool:
    return record["name"].startswith(SOURCES_MODULE)


def setup_logging(level: Optional[str] = None, log_dir: Optional[Path] = None) -> Path:
    """Install console and file sinks; returns the log directory.

    Besides the main and errors-only files, upstream feed activity
    (Open-Meteo, river gauges, reservoir table) goes to ``sources.log`` so
    outages can be traced without the forecast noise.
    """
    level = level or settings.logging.level
    log_dir = Path(log_dir) if log_dir else get_project_root() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, format=settings.logging.format, level=level, colorize=True)

    rolling = {
        "format": settings.logging.format,
        "rotation": settings.logging.rotation,
        "retention": settings.logging.retention,
        "compression": "zip",
    }
    logger.add(log_dir / f"{settings.app.name}.log", level=level, **rolling)
    logger.add(log_dir / "errors.log", level="ERROR", **rolling)
    logger.add(log_dir / "sources.log", level="INFO", filter=_from_data_sources, **rolling)

    logger.info(f"Logging initialized - Level: {level}, env: {settings.app.environment}")
    return log_dir
