"""Benchmark: unit-file parse and serialize throughput.

Measures how many parse and serialize operations complete per second
using the public ``unitfile`` API.
"""
from __future__ import annotations

import json
import time
from pathlib import Path

import unitfile

_ITERATIONS: int = 5_000

_SAMPLE_UNIT = b"""\
# Benchmark unit
[Unit]
Description=Benchmark service
After=network.target
Wants=network-online.target

[Service]
Type=simple
ExecStart=/usr/bin/bench \\
  --threads 4 \\
  --verbose
Restart=on-failure
Environment=A=1 B=2

[Install]
WantedBy=multi-user.target
"""


def _summarise(operation: str, iterations: int, total: float) -> dict[str, object]:
    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_parse_throughput(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark ``parse_sections`` on a typical service unit.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(iterations):
        unitfile.parse_sections(_SAMPLE_UNIT)
    total = time.perf_counter() - start
    return _summarise("unitfile_parse_throughput", iterations, total)


def bench_serialize_throughput(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark grouped serialization of the parsed sample unit."""
    options = unitfile.parse_options(_SAMPLE_UNIT)

    start = time.perf_counter()
    for _ in range(iterations):
        unitfile.serialize_options(options).read()
    total = time.perf_counter() - start
    return _summarise("unitfile_serialize_throughput", iterations, total)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_parse_throughput, "parse_throughput_baseline.json"),
        (bench_serialize_throughput, "serialize_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
