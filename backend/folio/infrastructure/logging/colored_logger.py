"""Colored pipeline logger — ANSI-colored console logging for the image lifecycle.

Each upload runs through a fixed sequence of stages; tagging every log line
with its stage makes an upload easy to follow in the terminal.

Color scheme:
    🟢 Green   — Receive / Stage
    🟡 Yellow  — Convert
    🟣 Magenta — Resize
    🔵 Blue    — Persist
    ⚪ Gray    — Cleanup / details
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, NamedTuple


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str


class PipelineStage:
    """Stages of an image upload, with colors and icons."""

    RECEIVE = Stage("RECEIVE", _Colors.GREEN, "📥")
    STAGE = Stage("STAGE", _Colors.GREEN, "💾")
    CONVERT = Stage("CONVERT", _Colors.YELLOW, "🖼️")
    RESIZE = Stage("RESIZE", _Colors.MAGENTA, "📐")
    PERSIST = Stage("PERSIST", _Colors.BLUE, "🗄️")
    CLEANUP = Stage("CLEANUP", _Colors.GRAY, "🧹")


def _kwargs_suffix(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


class PipelineLogger:
    """Color-coded logger for the image pipeline.

    Usage:
        plog = PipelineLogger("ImageAssetService")
        plog.step_start(PipelineStage.RECEIVE, "Upload for 2024/03/07/Hello/")
        with plog.timed_step(PipelineStage.CONVERT, "Converting cover.png"):
            ...
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            f"{stage.color}{_Colors.BOLD}{stage.icon} [{stage.label}]{_Colors.RESET} "
            f"{stage.color}{message}{_Colors.RESET}{_kwargs_suffix(kwargs)}"
        )

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        self._logger.info(
            f"{stage.color}{stage.icon} [{stage.label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}{_kwargs_suffix(kwargs)}"
        )

    def step_error(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{stage.label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.info(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}{_kwargs_suffix(kwargs)}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any) -> Iterator[None]:
        """Log start and end of a step with the elapsed time; errors are logged and re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.step_error(stage, f"{message} — failed after {time.perf_counter() - start:.2f}s", error=e)
            raise
        self.step_complete(stage, f"{message} — {time.perf_counter() - start:.2f}s")
