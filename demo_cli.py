#!/usr/bin/env python3
"""
demo_cli.py — Standalone command-line demo
============================================
Runs the scoring pipeline WITHOUT the FastAPI server.
Useful for quick testing, demos, and debugging.

Usage:
    python demo_cli.py measure --age 35 --duration 30 --heart-rate 80 --seed 7
    python demo_cli.py classify 92 --age 50 --variability 0.4 --quality 0.9

⚠️  DISCLAIMER: This is a WELLNESS DEMO — NOT a medical device.
"""

import argparse
import sys

from api.schemas import UserProfile
from api.session import MeasurementSession
from errors import InvalidHeartRate, StressEstimatorError
from model.advice import advice_for_bucket, interpretation_for_bucket
from model.stress import bucket_for_score, color_for_bucket, stress_score
from utils.logger import get_logger

logger = get_logger("demo_cli")


def pretty_print(label: str, value, unit: str = "") -> None:
    """Colourised terminal output."""
    print(f"  \033[1;36m{label:<28}\033[0m \033[1;33m{value}\033[0m {unit}")


def _banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def run_measure(args) -> int:
    _banner("STRESS PULSE — SIMULATED MEASUREMENT")
    print(f"  Duration     : {args.duration} s")
    print(f"  Simulated HR : {args.heart_rate:.0f} BPM")
    print(f"  Age          : {args.age}\n")

    session = MeasurementSession(realtime=args.realtime)
    session.set_profile(UserProfile(age=args.age))

    try:
        payload = session.measure(
            duration_seconds=args.duration,
            simulated_heart_rate=args.heart_rate,
            seed=args.seed,
        )
    except StressEstimatorError as e:
        print(f"  ERROR: {e}")
        return 1

    result = payload["result"]
    _banner("RESULTS")
    pretty_print("Heart Rate", result.heart_rate, "BPM")
    pretty_print("Stress Level", f"{result.stress_level.value} ({payload['label']})")
    pretty_print("Colour", payload["color"])
    pretty_print("HRV (normalised)", result.hrv)
    pretty_print("Signal quality", result.quality_percent, "%")
    pretty_print("Reliability", payload["reliability"])
    print(f"\n    {payload['interpretation']['full_description']}")
    print(f"    Tip: {payload['advice']}")
    print("\n  ── Measurement tips ──")
    for tip in payload["recommendations"]:
        print(f"    • {tip}")

    _banner("⚠️  All values above are ESTIMATES, not medical readings.")
    return 0


def run_classify(args) -> int:
    factors = {
        "variability": args.variability,
        "quality": args.quality,
        "trend": args.trend,
    }
    try:
        score = stress_score(args.heart_rate, args.age, factors)
    except InvalidHeartRate as e:
        print(f"  ERROR: {e}")
        return 2

    level = bucket_for_score(score)
    _banner("STRESS CLASSIFICATION")
    pretty_print("Heart Rate", args.heart_rate, "BPM")
    pretty_print("Score", f"{score:.3f}")
    pretty_print("Stress Level", f"{level.value} ({level.label})")
    pretty_print("Colour", color_for_bucket(level))
    print(f"\n    {interpretation_for_bucket(level, args.heart_rate, args.age)['full_description']}")
    print(f"    Tip: {advice_for_bucket(level)}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stress Pulse Estimator CLI Demo")
    sub = parser.add_subparsers(dest="command", required=True)

    measure = sub.add_parser("measure", help="Run a simulated camera measurement")
    measure.add_argument("--age", type=int, default=30, help="Age (years)")
    measure.add_argument("--duration", type=int, default=30, help="Measurement duration (seconds)")
    measure.add_argument("--heart-rate", type=float, default=72.0, help="Simulated pulse (BPM)")
    measure.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    measure.add_argument("--realtime", action="store_true", help="Pace sampling in real time")
    measure.set_defaults(func=run_measure)

    classify = sub.add_parser("classify", help="Classify a known heart rate")
    classify.add_argument("heart_rate", type=float, help="Heart rate (BPM, 40–200)")
    classify.add_argument("--age", type=float, default=30, help="Age (years)")
    classify.add_argument("--variability", type=float, default=None)
    classify.add_argument("--quality", type=float, default=None)
    classify.add_argument("--trend", type=float, default=None)
    classify.set_defaults(func=run_classify)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
