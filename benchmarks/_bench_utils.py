"""Shared benchmark runtime helpers."""

from __future__ import annotations

import logging
import math
import os
import platform
import time
from typing import Any

import jax

_LOG = logging.getLogger(__name__)


def configure_cpu_affinity_from_env() -> dict[str, Any]:
    requested = os.environ.get("VECVIEW_BENCH_CPU_AFFINITY", "").strip()
    info: dict[str, Any] = {"requested": requested or None, "applied": False, "active": None}
    if not requested or not hasattr(os, "sched_setaffinity"):
        return info

    cpus = _parse_affinity_spec(requested)
    if not cpus:
        return info
    try:
        os.sched_setaffinity(0, cpus)
    except OSError as exc:
        _LOG.warning("could not pin benchmark to cpus %s: %s", sorted(cpus), exc)
        return info
    info["applied"] = True
    info["active"] = sorted(os.sched_getaffinity(0))
    return info


def _parse_affinity_spec(spec: str) -> set[int]:
    out: set[int] = set()
    for part in spec.split(","):
        token = part.strip()
        if not token:
            continue
        if "-" in token:
            lo, hi = sorted(int(bound) for bound in token.split("-", 1))
            out.update(range(lo, hi + 1))
        else:
            out.add(int(token))
    return out


def host_metadata() -> dict[str, Any]:
    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": getattr(jax, "__version__", "unknown"),
        "backend": jax.default_backend(),
        "cpu_count": os.cpu_count(),
    }


def block_until_ready(value: object) -> None:
    if hasattr(value, "block_until_ready"):
        value.block_until_ready()


def percentile(values: list[float], q: float) -> float:
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    pos = (len(ordered) - 1) * q
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    if lo == hi:
        return ordered[lo]
    alpha = pos - lo
    return ordered[lo] * (1.0 - alpha) + ordered[hi] * alpha


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    return math.sqrt(sum((v - m) ** 2 for v in values) / (len(values) - 1))


def sample_ms(fn, args: tuple[object, ...], *, repeats: int, warmup: int, samples: int) -> list[float]:
    """Per-call wall time in milliseconds, one entry per sample of ``repeats`` calls."""
    for _ in range(max(0, warmup)):
        block_until_ready(fn(*args))

    rows: list[float] = []
    for _ in range(samples):
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            block_until_ready(fn(*args))
        elapsed_ns = time.perf_counter_ns() - start_ns
        rows.append((elapsed_ns / repeats) / 1e6)
    return rows
