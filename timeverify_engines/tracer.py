"""
timeverify_engines.tracer -- Engine invocation tracer emitting TIMEVERIFY_ENGINE_TRACE.

Responsibility:
    ``@traced_engine`` wraps an aggregation or calendar engine call and emits
    one structured log record per call with engine_name, engine_version, an
    input_fingerprint (SHA-256 prefix of selected keyword inputs), the
    duration and the result size when the result is a sequence.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only.  Logs under ``timeverify.engines.tracer`` so the
    record flows through the kernel's structured formatter once logging is
    configured, without this module importing the kernel.

Invariants enforced:
    - Fingerprints are deterministic: dict keys are sorted, dates render
      ISO-8601, Decimals render with their exponent normalized to the value
      (``Decimal("1.50")`` and ``Decimal("1.5")`` hash alike).
    - The decorator never mutates inputs or results.

Failure modes:
    - Fingerprint fields missing from kwargs are recorded as "null".
    - Exceptions raised by the engine propagate unchanged; no trace record
      is emitted for a failed call.

Usage:
    from timeverify_engines.tracer import traced_engine

    @traced_engine("weekly_summary", "1.0", fingerprint_fields=("employee",))
    def summarize_week(*, employee, window, ...):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import logging
import time
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

_logger = logging.getLogger("timeverify.engines.tracer")

TRACE_TYPE = "TIMEVERIFY_ENGINE_TRACE"


def _canonicalize(value: Any) -> str:
    """Stable string form of a value for fingerprinting."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _canonicalize(value.value)
    if isinstance(value, Decimal):
        return str(value.normalize()) if value == value else "NaN"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _canonicalize(
            {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        )
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (frozenset, set)):
        return "{" + ",".join(sorted(_canonicalize(v) for v in value)) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    kwargs: dict[str, Any],
) -> str:
    """Compute a 16-character SHA-256 prefix over the named keyword inputs.

    Only the fields listed in fingerprint_fields are included, in the order
    given.  Missing fields are recorded as "null".
    """
    parts: list[str] = []
    for field in fingerprint_fields:
        parts.append(f"{field}={_canonicalize(kwargs.get(field))}")
    canonical = "|".join(parts)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits TIMEVERIFY_ENGINE_TRACE for engine invocations.

    Args:
        engine_name: Engine identifier (e.g., "weekly_summary").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Keyword argument names to include in
            the input fingerprint hash.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = ""
            if fingerprint_fields:
                fp = compute_input_fingerprint(fingerprint_fields, kwargs)

            t0 = time.monotonic()
            result = func(*args, **kwargs)
            duration_ms = round((time.monotonic() - t0) * 1000, 2)

            extra: dict[str, Any] = {
                "trace_type": TRACE_TYPE,
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fp,
                "duration_ms": duration_ms,
                "function": func.__qualname__,
            }
            if isinstance(result, (list, tuple)):
                extra["result_count"] = len(result)

            _logger.info(TRACE_TYPE, extra=extra)
            return result

        return wrapper

    return decorator
