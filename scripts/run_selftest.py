"""CLI entry point for the AES self-test suite.

Usage:
    python scripts/run_selftest.py                          # full suite
    python scripts/run_selftest.py --vectors 50 --no-sac    # quick check
    python scripts/run_selftest.py --output-dir runs --seed 7

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeslab.config import load_settings
from aeslab.evaluation import run_self_test
from aeslab.utils.repro import make_run_dir, set_global_seed, write_json


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="AES self-test: known answers, roundtrip, SAC, S-box")
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per key size and mode (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--trials", type=int, default=settings.sac_trials,
        help=f"SAC trials (default: {settings.sac_trials})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.runs_dir,
        help=f"Output directory (default: {settings.runs_dir})",
    )
    parser.add_argument("--no-sac", action="store_true", help="Skip SAC analysis")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    set_global_seed(args.seed)
    run_settings = settings.model_copy(update={
        "roundtrip_vectors": args.vectors,
        "sac_trials": args.trials,
        "global_seed": args.seed,
    })

    report = run_self_test(run_settings, include_sac=not args.no_sac, progress_callback=_cli_progress)
    print(report.to_summary())

    run_dir = make_run_dir(args.output_dir, "selftest")
    write_json(run_dir / "report.json", report.to_dict())
    print(f"\nReport saved to: {run_dir / 'report.json'}")

    return 0 if report.all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
