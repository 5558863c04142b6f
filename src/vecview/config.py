"""Feature flags read from the environment at import time.

``VECVIEW_CHECK_PARAMS``
    Validate ``None`` sources and window arguments at ex entry points (default on).
``VECVIEW_CHECK_ALIASING``
    Raise :class:`~vecview.errors.AliasingError` when the destination of an
    out-of-order operation overlaps one of its sources (default off).
``VECVIEW_EPSILON``
    Default tolerance of the ``almost_*`` comparisons.

Callers read these as ``config.NAME`` at call time, so tests may patch them.
"""

from __future__ import annotations

import logging
import os

_LOG = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) != "0"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        _LOG.debug("ignoring non-numeric %s=%r", name, raw)
        return default


CHECK_PARAMS: bool = _env_flag("VECVIEW_CHECK_PARAMS", "1")
CHECK_ALIASING: bool = _env_flag("VECVIEW_CHECK_ALIASING", "0")
EPSILON: float = _env_float("VECVIEW_EPSILON", 1e-9)

_LOG.debug(
    "vecview config: check_params=%s check_aliasing=%s epsilon=%g",
    CHECK_PARAMS,
    CHECK_ALIASING,
    EPSILON,
)
