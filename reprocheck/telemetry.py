from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

log = logging.getLogger("reprocheck.telemetry")


@contextmanager
def timed(stage: str, ctx: Dict[str, Any] | None = None) -> Iterator[None]:
    """Log elapsed milliseconds for ``stage`` once the block exits, even on error."""
    start = time.perf_counter()
    try:
        yield
    finally:
        payload: Dict[str, Any] = {"stage": stage, "ms": round((time.perf_counter() - start) * 1000, 3)}
        if ctx:
            payload.update(ctx)
        log.info("timing %s", stage, extra=payload)
