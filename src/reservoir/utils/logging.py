from __future__ import annotations
import logging
import time
from functools import wraps
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Send reservoir log records to stderr through rich at ``level`` (a logging level name)."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logger = logging.getLogger("reservoir")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_time=False, show_path=False))
    logger.setLevel(numeric)


def _short(value: Any, limit: int = 60) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Log each call with abbreviated arguments and its duration.

    Failures are logged at WARNING without a traceback and re-raised; the
    caller decides how to report them.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            shown = ", ".join([_short(a) for a in args] + [f"{k}={_short(v)}" for k, v in kwargs.items()])
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.warning(
                    "%s(%s) failed after %.1f ms: %s",
                    func.__qualname__, shown, (time.perf_counter() - started) * 1000, exc,
                )
                raise
            logger.debug(
                "%s(%s) -> %s in %.1f ms",
                func.__qualname__, shown, _short(result), (time.perf_counter() - started) * 1000,
            )
            return result

        return _wrapper

    return _decorator
