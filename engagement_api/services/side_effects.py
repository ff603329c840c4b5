# /engagement_api/services/side_effects.py

import logging
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_best_effort(action: Callable[[], T], description: str, on_failure: Optional[Callable[[], None]] = None) -> Optional[T]:
    """
    Runs a secondary write whose failure must never fail the request that
    triggered it. Any exception is logged with its traceback and swallowed;
    `on_failure` (e.g. a session rollback) runs before returning None.
    """
    try:
        return action()
    except Exception:
        logger.exception("Best-effort update failed: %s", description)
        if on_failure is not None:
            try:
                on_failure()
            except Exception:
                logger.exception("Cleanup after failed best-effort update also failed: %s", description)
        return None
