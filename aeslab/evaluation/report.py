"""Structured self-test report builder.

Aggregates known-answer, roundtrip, SAC and S-box results into a single
serializable report for export and console display.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aeslab.utils.repro import utc_timestamp

from .avalanche import SACResult
from .kat import KATResult
from .roundtrip import RoundtripResult
from .sbox_analysis import SBoxAnalysisResult


@dataclass
class EvaluationReport:
    """Complete self-test report aggregating all analysis results."""
    timestamp: str = ""
    kat_result: Optional[KATResult] = None
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sac_results: List[SACResult] = field(default_factory=list)
    sbox_results: List[SBoxAnalysisResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = utc_timestamp()

    @property
    def all_pass(self) -> bool:
        """Correctness checks only; SAC is a statistical indicator, not a gate."""
        kat_ok = self.kat_result is None or self.kat_result.is_perfect
        sbox_ok = all(s.is_bijective and s.inverse_matches for s in self.sbox_results)
        return kat_ok and sbox_ok and not self.failing_variants()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "kat": self.kat_result.to_dict() if self.kat_result else None,
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sac": [s.to_dict() for s in self.sac_results],
            "sbox": [s.to_dict() for s in self.sbox_results],
            "summary": {
                "all_pass": self.all_pass,
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "failing_variants": self.failing_variants(),
            },
        }

    def to_summary(self) -> str:
        """Human-readable summary for the console."""
        lines = [f"Self-test report - {self.timestamp}", "=" * 50]

        if self.kat_result:
            lines.append(f"\n{self.kat_result.summary()}")
            for name in self.kat_result.failed_names:
                lines.append(f"  failed: {name}")

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip Tests: {rt_pass}/{len(self.roundtrip_results)} configurations pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.sac_results:
            sac_pass = sum(1 for s in self.sac_results if s.passes_sac)
            lines.append(f"\nSAC Analysis: {sac_pass}/{len(self.sac_results)} pass")
            for s in self.sac_results:
                lines.append(f"  {s.summary()}")

        if self.sbox_results:
            lines.append("\nS-box Analysis:")
            for s in self.sbox_results:
                lines.append(f"  {s.summary()}")

        lines.append(f"\nOverall: {'PASS' if self.all_pass else 'FAIL'}")
        return "\n".join(lines)

    def failing_variants(self) -> List[str]:
        """Return labels of configurations with roundtrip failures."""
        return [f"{r.variant}-{r.mode}" for r in self.roundtrip_results if not r.is_perfect]
