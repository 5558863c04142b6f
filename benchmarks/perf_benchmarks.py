"""Views versus copies, and vecview kernels next to their JAX equivalents."""

from __future__ import annotations

import argparse
import json
import random
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

import jax
from tabulate import tabulate

from vecview import arrays, as_jax_matrix, linalg, reverse, slice, stride
from _bench_utils import (
    configure_cpu_affinity_from_env,
    host_metadata,
    mean as _mean,
    percentile as _percentile,
    sample_ms,
    stddev as _stddev,
)


DEFAULT_FLAT_N = 100_000
PROFILE_PRESETS: dict[str, dict[str, int]] = {
    "quick": {"samples": 3, "warmup": 1, "repeats": 5},
    "full": {"samples": 7, "warmup": 3, "repeats": 20},
}


@dataclass(frozen=True)
class Case:
    name: str
    fn: object
    args: tuple[object, ...]
    note: str


@dataclass(frozen=True)
class TimingStats:
    mean_ms: float
    stdev_ms: float
    p50_ms: float
    p95_ms: float
    min_ms: float


@dataclass(frozen=True)
class Row:
    name: str
    note: str
    samples: int
    timing: TimingStats


def _summarize_ms(ms: list[float]) -> TimingStats:
    return TimingStats(
        mean_ms=_mean(ms),
        stdev_ms=_stddev(ms),
        p50_ms=_percentile(ms, 0.50),
        p95_ms=_percentile(ms, 0.95),
        min_ms=min(ms),
    )


def _sum_reversed_copy(data: list[float]) -> float:
    return sum(arrays.reverse(data))


def _sum_reverse_view(data: list[float]) -> float:
    return sum(reverse(data))


def _add_sliced_copies(a: list[float], b: list[float], n: int) -> list[float]:
    half = n // 2
    return arrays.add(a[half : 2 * half], b[:half])


def _add_slice_ex(a: list[float], b: list[float], n: int) -> list[float]:
    half = n // 2
    return arrays.add_ex(a, half + 1, half, b, 1)


def _add_slice_views(a: list[float], b: list[float], n: int) -> list[float]:
    half = n // 2
    return arrays.add(slice(a, half + 1, half), slice(b, 1, half))


def _build_cases(flat_n: int) -> list[Case]:
    rng = random.Random(0)
    a = [rng.random() for _ in range(flat_n)]
    b = [rng.random() for _ in range(flat_n)]
    mat4 = [rng.random() for _ in range(16)]
    jax_matmul = jax.jit(lambda x, y: x @ y)
    jmat = as_jax_matrix(mat4, 1, 4, 4)
    return [
        Case("reverse-copy-sum", _sum_reversed_copy, (a,), "allocating reverse then sum"),
        Case("reverse-view-sum", _sum_reverse_view, (a,), "sum through a ReverseView"),
        Case("add-sliced-copies", _add_sliced_copies, (a, b, flat_n), "python slicing then add"),
        Case("add-slice-ex", _add_slice_ex, (a, b, flat_n), "add_ex with offsets"),
        Case("add-slice-views", _add_slice_views, (a, b, flat_n), "add over SliceViews"),
        Case("stride-copy", arrays.copy, (stride(a, 1, 2, flat_n // 2),), "copy every other element"),
        Case("matmul4-vecview", linalg.matmul, (mat4, mat4), "column-major 4x4 product"),
        Case("matmul4-jax", jax_matmul, (jmat, jmat), "jitted jnp 4x4 product"),
    ]


def run_benchmarks(flat_n: int, *, samples: int, warmup: int, repeats: int) -> list[Row]:
    out: list[Row] = []
    for case in _build_cases(flat_n):
        ms = sample_ms(case.fn, case.args, repeats=repeats, warmup=warmup, samples=samples)
        out.append(Row(name=case.name, note=case.note, samples=len(ms), timing=_summarize_ms(ms)))
    return out


def _print_rows(rows: list[Row]) -> None:
    table = [
        (row.name, row.timing.mean_ms, row.timing.p95_ms, row.timing.min_ms, row.note)
        for row in rows
    ]
    print(
        tabulate(
            table,
            headers=("case", "mean ms", "p95 ms", "min ms", "note"),
            floatfmt=".4f",
            colalign=("left", "right", "right", "right", "left"),
        )
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="vecview view/copy benchmarks")
    parser.add_argument("--profile", choices=sorted(PROFILE_PRESETS), default="quick", help="fixed benchmark profile")
    parser.add_argument("--samples", type=int, default=None, help="override timing sample count")
    parser.add_argument("--warmup", type=int, default=None, help="override warmup rounds")
    parser.add_argument("--repeats", type=int, default=None, help="override calls per sample")
    parser.add_argument("--flat-n", type=int, default=DEFAULT_FLAT_N, help="flat-array length")
    parser.add_argument("--json-out", default=None, help="write results as JSON to this path")
    args = parser.parse_args()

    affinity_info = configure_cpu_affinity_from_env()
    profile = PROFILE_PRESETS[args.profile]
    samples = profile["samples"] if args.samples is None else args.samples
    warmup = profile["warmup"] if args.warmup is None else args.warmup
    repeats = profile["repeats"] if args.repeats is None else args.repeats

    print(f"config: profile={args.profile}, samples={samples}, warmup={warmup}, repeats={repeats}, flat_n={args.flat_n}")
    print(f"host: backend={jax.default_backend()}, affinity={affinity_info.get('active')}")
    print()

    rows = run_benchmarks(args.flat_n, samples=samples, warmup=warmup, repeats=repeats)
    _print_rows(rows)

    if args.json_out:
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "config": {
                "profile": args.profile,
                "samples": samples,
                "warmup": warmup,
                "repeats": repeats,
                "flat_n": args.flat_n,
            },
            "affinity": affinity_info,
            "host": host_metadata(),
            "rows": [asdict(row) for row in rows],
        }
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON benchmark output: {outpath}")


if __name__ == "__main__":
    main()
