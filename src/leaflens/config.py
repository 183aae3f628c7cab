"""
Runtime configuration and logging setup for LeafLens.

Settings are plain dataclasses whose defaults come from environment
variables, so the same analyzer can be tuned from a shell or a service
unit without touching code. Nothing here runs on import: callers opt in
to logging by calling setup_logging().
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path


CONSOLE_HANDLER_NAME = "leaflens_console"
FILE_HANDLER_NAME = "leaflens_file"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SampleBase(str, Enum):
    """
    Denominator used when turning pixel counts into area percentages.

    LEGACY divides the total pixel count by the sampling stride (four).
    That equals the number of visited pixels only when the pixel count is
    a multiple of four; otherwise the base is fractional and slightly too
    small, so tiny images can report more than 100%. SAMPLED divides by
    the number of pixels the sampler actually visited.
    """

    LEGACY = "legacy"
    SAMPLED = "sampled"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_sample_base(name: str, default: SampleBase) -> SampleBase:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return SampleBase(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in SampleBase)
        raise ValueError(
            f"Environment variable {name} must be one of: {allowed}. Got {value!r}."
        ) from None


def _env_optional_path(name: str) -> Path | None:
    value = os.getenv(name)
    if not value:
        return None
    return Path(value)


@dataclass
class AnalyzerSettings:
    """Analyzer and source settings loaded from environment variables."""

    sample_base: SampleBase = field(
        default_factory=lambda: _env_sample_base("LEAFLENS_SAMPLE_BASE", SampleBase.LEGACY)
    )
    camera_index: int = field(default_factory=lambda: _env_int("LEAFLENS_CAMERA_INDEX", 0))
    # Auto-exposure on most webcams needs a few frames before colors settle
    camera_warmup_frames: int = field(
        default_factory=lambda: _env_int("LEAFLENS_CAMERA_WARMUP_FRAMES", 0)
    )
    debug: bool = field(default_factory=lambda: _env_bool("LEAFLENS_DEBUG", False))
    log_file: Path | None = field(default_factory=lambda: _env_optional_path("LEAFLENS_LOG_FILE"))

    def __post_init__(self) -> None:
        # Accept plain strings from callers building settings by hand
        if not isinstance(self.sample_base, SampleBase):
            self.sample_base = SampleBase(str(self.sample_base).lower())
        if self.camera_index < 0:
            raise ValueError(f"camera_index must be >= 0, got {self.camera_index}.")
        if self.camera_warmup_frames < 0:
            raise ValueError(
                f"camera_warmup_frames must be >= 0, got {self.camera_warmup_frames}."
            )


def setup_logging(
    debug: bool | None = None,
    log_file: str | Path | None = None,
    settings: AnalyzerSettings | None = None,
) -> None:
    """
    Install LeafLens console (and optional file) handlers on the root logger.

    Explicit arguments win; anything left as None falls back to
    ``settings``, which is read from the environment (LEAFLENS_DEBUG,
    LEAFLENS_LOG_FILE) when omitted.

    Safe to call more than once: handlers are tagged by name and never
    added twice.
    """
    if debug is None or log_file is None:
        settings = settings if settings is not None else AnalyzerSettings()
        if debug is None:
            debug = settings.debug
        if log_file is None:
            log_file = settings.log_file

    log_level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)

    has_console = any(getattr(h, "name", "") == CONSOLE_HANDLER_NAME for h in root.handlers)
    has_file = any(getattr(h, "name", "") == FILE_HANDLER_NAME for h in root.handlers)

    formatter = logging.Formatter(LOG_FORMAT)

    if not has_console:
        console_handler = logging.StreamHandler(stream=sys.stdout)
        console_handler.name = CONSOLE_HANDLER_NAME
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if log_file is not None and not has_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.name = FILE_HANDLER_NAME
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
