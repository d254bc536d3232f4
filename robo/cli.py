"""Robo predictor CLI entry point."""

from __future__ import annotations

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="robo",
        description="Robo day/night predictor — replay recorded or simulated planet visits",
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--replay",
        type=str,
        metavar="CSV",
        help="Replay a CSV of planet_id,computer_prediction,actual rows",
    )
    mode.add_argument(
        "--simulate",
        action="store_true",
        help="Generate a seeded synthetic universe and replay it",
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        default="config",
        help="Config directory path (default: config)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Environment name (default: from ROBO_ENV)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Simulated visits (default: simulation.steps from config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Simulation seed (default: simulation.seed from config)",
    )
    parser.add_argument(
        "--save-steps",
        type=str,
        default=None,
        metavar="CSV",
        help="Write the simulated steps to a CSV that --replay can read",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        metavar="PATH",
        help="Also write the JSON report to PATH",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the JSON report instead of the console summary",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.replay:
        from robo.runner import run_replay

        return run_replay(
            csv_path=args.replay,
            config_dir=args.config_dir,
            env=args.env,
            as_json=args.json,
            report_path=args.report,
        )

    if args.simulate:
        from robo.runner import run_simulation

        return run_simulation(
            config_dir=args.config_dir,
            env=args.env,
            steps=args.steps,
            seed=args.seed,
            as_json=args.json,
            report_path=args.report,
            save_steps=args.save_steps,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
