"""Instrumentation for stylist entry points: input validation plus call events."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from stylist_app.logging_config import get_logger, log_event, operation_context

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

_PREVIEW_KEYS = 6


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _preview(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    preview = {key: kwargs[key] for key in list(kwargs)[:_PREVIEW_KEYS]}
    if len(kwargs) > _PREVIEW_KEYS:
        preview["truncated"] = True
    return preview


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Validate keyword arguments and log started/completed/failed events.

    With ``input_model`` the wrapped callable receives the validated field
    values; nested models are passed through as model instances. A
    validation failure is handed to ``on_validation_error`` when given and
    re-raised otherwise.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with operation_context(f"tool:{tool_name}") as correlation_id:
                started = time.perf_counter()
                if input_model is not None:
                    try:
                        kwargs = dict(input_model.model_validate(kwargs))
                    except ValidationError as exc:
                        log_event(
                            LOGGER,
                            logging.WARNING,
                            "tool_validation_failed",
                            tool=tool_name,
                            correlation_id=correlation_id,
                            errors=[f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors()],
                        )
                        if on_validation_error is None:
                            raise
                        return on_validation_error(exc)

                log_event(
                    LOGGER,
                    logging.INFO,
                    "tool_call_started",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    arguments=_preview(kwargs),
                )
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "tool_call_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        duration_ms=_elapsed_ms(started),
                        exc_info=True,
                    )
                    raise
                log_event(
                    LOGGER,
                    logging.INFO,
                    "tool_call_completed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(started),
                )
                return result

        return wrapper

    return decorator


__all__ = ["instrument_tool"]
