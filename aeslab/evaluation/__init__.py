"""Self-test suite for the AES implementation.

Known-answer vectors, roundtrip verification, strict avalanche criterion and
S-box table analysis, aggregated into one report.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from aeslab.config import Settings, load_settings

from .avalanche import SACResult, compute_sac
from .kat import KATResult, KnownAnswerVector, builtin_vectors, run_known_answer_tests
from .report import EvaluationReport
from .roundtrip import RoundtripFailure, RoundtripResult, run_all_variants, run_roundtrip_tests
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox

logger = logging.getLogger(__name__)


def run_self_test(
    settings: Optional[Settings] = None,
    *,
    include_sac: bool = True,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> EvaluationReport:
    """Run every self-test stage and return the aggregated report."""
    settings = settings or load_settings()
    report = EvaluationReport()

    logger.info("Running known-answer vectors")
    report.kat_result = run_known_answer_tests()

    logger.info(
        "Running roundtrip tests (%d vectors per configuration, seed=%d)",
        settings.roundtrip_vectors, settings.global_seed,
    )
    report.roundtrip_results = run_all_variants(
        num_vectors=settings.roundtrip_vectors,
        seed=settings.global_seed,
        progress_callback=progress_callback,
    )

    if include_sac:
        logger.info("Running SAC analysis (%d trials)", settings.sac_trials)
        for input_type in ("plaintext", "key"):
            report.sac_results.append(compute_sac(
                16,
                input_type=input_type,
                trials=settings.sac_trials,
                seed=settings.global_seed,
            ))

    report.sbox_results = [analyze_sbox()]

    if not report.all_pass:
        logger.warning("Self-test failed: %s", report.failing_variants() or "see report")
    return report


__all__ = [
    "KnownAnswerVector",
    "KATResult",
    "builtin_vectors",
    "run_known_answer_tests",
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "run_all_variants",
    "SACResult",
    "compute_sac",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "EvaluationReport",
    "run_self_test",
]
