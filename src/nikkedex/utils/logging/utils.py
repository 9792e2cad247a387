# ABOUTME: Structured logger access, context binding and timing decorators for async calls
# ABOUTME: Wiki requests and update pipeline steps share one start/succeed/fail event shape

import functools
import time
import uuid
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

Logger = structlog.stdlib.BoundLogger
AsyncFunc = Callable[..., Awaitable[Any]]


def get_logger(name: str = "nikkedex") -> Logger:
    return structlog.get_logger(name)


def generate_operation_id() -> str:
    """Eight hex characters, enough to tell concurrent operations apart in a log."""
    return uuid.uuid4().hex[:8]


def _url_argument(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str | None:
    for value in (*args, *kwargs.values()):
        if isinstance(value, str) and value.startswith(("http://", "https://")):
            return value
    return None


async def _timed(
    log: Logger, succeeded: str, failed: str, call: Awaitable[Any], summarize: Callable[[Any], dict]
) -> Any:
    started = time.perf_counter()
    try:
        result = await call
    except Exception as exc:
        log.error(
            failed,
            duration_seconds=round(time.perf_counter() - started, 3),
            error=str(exc),
            error_type=type(exc).__name__,
            success=False,
        )
        raise

    log.info(
        succeeded,
        duration_seconds=round(time.perf_counter() - started, 3),
        success=True,
        **summarize(result),
    )
    return result


def log_api_call(api_name: str, **context) -> Callable[[AsyncFunc], AsyncFunc]:
    """Time an outbound request and log its outcome.

    The first ``http(s)://`` argument is bound as ``url`` so failures can be
    traced back to the page or image that caused them.
    """

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(
                api_name=api_name, call_id=generate_operation_id(), url=_url_argument(args, kwargs), **context
            )
            log.debug(f"API call to {api_name}")
            call = func(*args, **kwargs)
            return await _timed(
                log, f"API call to {api_name} succeeded", f"API call to {api_name} failed", call, lambda _: {}
            )

        return wrapper

    return decorator


def _result_size(result: Any) -> dict:
    if isinstance(result, list | tuple | dict):
        return {"result_count": len(result)}
    return {}


def log_extraction_step(step_name: str) -> Callable[[AsyncFunc], AsyncFunc]:
    """Log the start, duration and result size of one update pipeline step."""

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            log = get_logger(func.__module__).bind(step=step_name, pipeline="nikke_update")
            log.info(f"Starting step: {step_name}")
            call = func(*args, **kwargs)
            return await _timed(
                log, f"Completed step: {step_name}", f"Failed step: {step_name}", call, _result_size
            )

        return wrapper

    return decorator


@contextmanager
def bound_context(logger: Logger, **context) -> Iterator[Logger]:
    """Yield ``logger`` bound to ``context``; an escaping exception is logged, then re-raised."""
    log = logger.bind(**context)
    try:
        yield log
    except Exception as exc:
        log.error("Context operation failed", error=str(exc), error_type=type(exc).__name__)
        raise


def with_record_context(name: str):
    return bound_context(get_logger(), record=name, entity_type="nikke")


def with_pipeline_context(pipeline_name: str, **context):
    """Bind a pipeline name and a fresh operation id for one CLI command."""
    return bound_context(get_logger(), pipeline=pipeline_name, operation_id=generate_operation_id(), **context)
