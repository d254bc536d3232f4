"""Replay report generation — JSON and console output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from robo.backtesting.engine import ReplayResult
from robo.core.logging import get_logger
from robo.engine.memory import MEMORY_CEILING_BYTES

log = get_logger(__name__)


class ReplayReporter:
    """Generate replay reports in JSON and console formats."""

    def to_dict(self, result: ReplayResult) -> dict[str, Any]:
        """Flatten a result, including derived accuracy figures."""
        return {
            "steps": result.steps,
            "accuracy": result.accuracy,
            "computer_accuracy": result.computer_accuracy,
            "edge": result.edge,
            "rules": {
                name: {"fired": s.fired, "correct": s.correct, "accuracy": s.accuracy}
                for name, s in result.rules.items()
            },
            "memory": {
                "static_bytes": result.static_bytes,
                "used_bytes": result.used_bytes,
                "ceiling_bytes": MEMORY_CEILING_BYTES,
                "evictions": result.evictions,
            },
        }

    def generate_json(self, result: ReplayResult) -> str:
        return json.dumps(self.to_dict(result), indent=2)

    def save_json(self, result: ReplayResult, path: str | Path) -> Path:
        """Write the JSON report to *path*.

        Returns:
            Resolved Path of the written file.
        """
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.generate_json(result))
        log.info("replay_report_saved", path=str(out))
        return out.resolve()

    def print_summary(self, result: ReplayResult) -> str:
        """Format a human-readable summary for the console.

        Returns:
            Formatted summary string (also printed to stdout).
        """
        lines = [
            "",
            "=" * 50,
            "  REPLAY SUMMARY",
            "=" * 50,
            f"  {'Steps':<24s} {result.steps:>12d}",
            f"  {'Predictor Accuracy':<24s} {result.accuracy * 100:>11.2f}%",
            f"  {'Computer Accuracy':<24s} {result.computer_accuracy * 100:>11.2f}%",
            f"  {'Edge':<24s} {result.edge * 100:>+11.2f}%",
            "-" * 50,
        ]
        for name, stats in result.rules.items():
            lines.append(
                f"  {name:<24s} {stats.fired:>6d} fired {stats.accuracy * 100:>7.2f}%"
            )
        lines += [
            "-" * 50,
            f"  {'Used Bytes':<24s} {result.used_bytes:>12d}",
            f"  {'Declared Bytes':<24s} {result.static_bytes:>12d}",
            f"  {'Ceiling Bytes':<24s} {MEMORY_CEILING_BYTES:>12d}",
            f"  {'Evictions':<24s} {result.evictions:>12d}",
            "=" * 50,
            "",
        ]
        summary = "\n".join(lines)
        print(summary)
        return summary
