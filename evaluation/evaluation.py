#!/usr/bin/env python3
"""
Benchmark runner for the Huffman compressor.

This evaluation script:
- Generates synthetic corpora (uniform, repetitive, skewed, text-like)
- Compresses and decompresses each one, verifying the round-trip
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--size-kb N] [--output report.json]
"""
import json
import os
import platform
import random
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from huffman_service import HuffmanService  # noqa: E402


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "os_release": platform.release(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "cpu_count": os.cpu_count(),
    }


def gen_uniform(size, seed=0):
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(size))


def gen_repetitive(size, dominant=ord("A"), dom_frac=0.9, seed=0):
    rng = random.Random(seed)
    out = bytearray()
    for _ in range(size):
        out.append(dominant if rng.random() < dom_frac else rng.randrange(256))
    return bytes(out)


def gen_skewed(size, alphabet=64, seed=0):
    rng = random.Random(seed)
    weights = [1.0 / (i + 1) for i in range(alphabet)]
    return bytes(rng.choices(range(alphabet), weights=weights, k=size))


def gen_text(size, seed=0):
    rng = random.Random(seed)
    words = [b"the", b"huffman", b"tree", b"code", b"of", b"bits", b"and", b"a", b"byte", b"frequency"]
    out = bytearray()
    while len(out) < size:
        out += rng.choice(words) + (b"\n" if rng.random() < 0.1 else b" ")
    return bytes(out[:size])


GENERATORS = {
    "uniform": gen_uniform,
    "repetitive": gen_repetitive,
    "skewed": gen_skewed,
    "text": gen_text,
}


def measure(service, name, data):
    """Compress and decompress ``data``, returning one report row."""
    t0 = time.perf_counter()
    packed = service.compress(data)
    t1 = time.perf_counter()
    restored = service.decompress(packed)
    t2 = time.perf_counter()

    row = {
        "corpus": name,
        "original_size": len(data),
        "compressed_size": len(packed),
        "ratio": round(len(packed) / len(data), 4) if data else None,
        "compression_time_ms": round((t1 - t0) * 1000, 3),
        "decompression_time_ms": round((t2 - t1) * 1000, 3),
        "roundtrip_ok": restored == data,
    }
    status_icon = "✅" if row["roundtrip_ok"] else "❌"
    print(f"  {status_icon} {name}: {len(data)} -> {len(packed)} bytes")
    return row


def run_evaluation(size):
    """Run every generator at ``size`` bytes and collect the results."""
    print(f"\n{'=' * 60}")
    print("HUFFMAN COMPRESSION EVALUATION")
    print(f"{'=' * 60}")

    service = HuffmanService()
    rows = [measure(service, name, gen(size)) for name, gen in GENERATORS.items()]
    rows.append(measure(service, "empty", b""))

    passed = sum(1 for r in rows if r["roundtrip_ok"])
    print(f"\nResults: {passed}/{len(rows)} round-trips verified")
    return {
        "rows": rows,
        "summary": {"total": len(rows), "passed": passed, "failed": len(rows) - passed},
    }


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = Path(__file__).parent / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark the Huffman compressor")
    parser.add_argument("--size-kb", type=int, default=256, help="size of each synthetic corpus")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")

    results = run_evaluation(args.size_kb * 1024)
    success = results["summary"]["failed"] == 0

    finished_at = datetime.now()
    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
        "success": success,
        "environment": get_environment_info(),
        "results": results,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
