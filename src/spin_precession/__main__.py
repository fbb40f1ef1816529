"""Main entry point: python -m spin_precession"""

from __future__ import annotations

import argparse
import csv
import sys

from spin_precession import __version__
from spin_precession.analysis.metrics import MetricExtractor
from spin_precession.analysis.validation import Validator
from spin_precession.core.precession_engine import PrecessionEngine
from spin_precession.utils.constants import (
    DEFAULT_DT,
    DEFAULT_SAMPLES,
    DEFAULT_TOLERANCE,
    DEFAULT_TRACE_LENGTH,
)
from spin_precession.utils.types import EvolutionMode, PrecessionConfig, SpinState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spin-precession",
        description="Spin-1/2 precession in a static magnetic field",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")

    # simulate
    sim = sub.add_parser("simulate", help="Sample the precession tick by tick")
    sim.add_argument("--theta", type=float, default=0.0, help="Field angle from +z (radians)")
    sim.add_argument("--strength", type=float, default=1.0, help="Field strength")
    sim.add_argument("--steps", type=int, default=1000, help="Number of ticks")
    sim.add_argument("--dt", type=float, default=DEFAULT_DT, help="Time per tick")
    sim.add_argument(
        "--mode",
        choices=[m.value for m in EvolutionMode],
        default=EvolutionMode.FIELD_EIGENBASIS.value,
        help="Initial state: field eigenbasis (always |up>) or free",
    )
    sim.add_argument(
        "--initial",
        type=float,
        nargs=4,
        metavar=("A_RE", "A_IM", "B_RE", "B_IM"),
        help="Initial amplitudes for --mode free (default |up>)",
    )
    sim.add_argument("--trace-length", type=int, default=DEFAULT_TRACE_LENGTH, help="Trace buffer size")
    sim.add_argument("--csv", type=str, metavar="PATH", help="Export per-tick history as CSV")
    sim.add_argument("--plots", action="store_true", help="Generate figures")
    sim.add_argument("--save-dir", type=str, default="~/Desktop", help="Figure output directory")

    # validate
    val = sub.add_parser("validate", help="Cross-check the kernel against the analytical reference")
    val.add_argument("--theta", type=float, default=1.0, help="Field angle from +z (radians)")
    val.add_argument("--strength", type=float, default=1.0, help="Field strength")
    val.add_argument("--samples", type=int, default=DEFAULT_SAMPLES, help="Time samples")
    val.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE, help="Pass threshold")

    return parser


def build_config(args: argparse.Namespace) -> PrecessionConfig:
    """Map simulate flags onto a PrecessionConfig."""
    mode = EvolutionMode.parse(args.mode)
    if args.initial is not None and mode is not EvolutionMode.FREE_INITIAL_STATE:
        raise ValueError("--initial only applies with --mode free")

    initial_state = None
    if args.initial is not None:
        a_re, a_im, b_re, b_im = args.initial
        initial_state = SpinState(complex(a_re, a_im), complex(b_re, b_im))

    return PrecessionConfig(
        theta=args.theta,
        strength=args.strength,
        mode=mode,
        initial_state=initial_state,
        dt=args.dt,
        trace_length=args.trace_length,
    )


def run_simulation(args: argparse.Namespace) -> None:
    """Engine -> history -> metrics -> report."""
    config = build_config(args)

    print(f"Field: theta={config.theta:.4f} rad | strength={config.strength:.4f}")
    print(f"Mode: {config.mode.value} | Steps: {args.steps} | dt: {config.dt}")
    if config.mode is EvolutionMode.FREE_INITIAL_STATE:
        state = config.initial_state
        print(f"Initial state: a={state.a:.4f} b={state.b:.4f} (|psi|^2={state.norm_squared:.4f})")
        if not state.is_normalized:
            print("  warning: initial state is not normalized; expectation values are scaled")
    print()

    engine = PrecessionEngine(config=config)
    print(f"Running precession engine ({args.steps} steps)...")
    history = engine.run(args.steps)

    extractor = MetricExtractor(history)
    report = extractor.full_report()
    traj = report["trajectory_stats"]
    prec = report["precession_stats"]
    final = engine.bloch

    print()
    print("=" * 50)
    print(" RESULTS")
    print("=" * 50)
    print(f"  Final time:          {engine.time:.4f}")
    print(f"  Final <S>:           ({final[0]:+.4f}, {final[1]:+.4f}, {final[2]:+.4f})")
    print(f"  Mean |<S>|:          {traj['magnitude_mean']:.6f}")
    print(f"  |<S>| drift:         {traj['magnitude_drift']:.2e}")
    if prec["cone_angle_mean"] is not None:
        print(f"  Cone half-angle:     {prec['cone_angle_mean']:.4f} rad")
    print(f"  Trace samples:       {len(engine.trace)}/{engine.trace.max_length}")
    print("=" * 50)

    if args.csv:
        export_csv(args.csv, history)

    if args.plots:
        from spin_precession.visualization.plots import PlotSuite

        print("\nGenerating plots...")
        plots = PlotSuite(save_dir=args.save_dir)
        plots.bloch_trajectory(engine.trace.as_array(), engine.field_vector)
        plots.components_vs_time(history)
        plots.amplitude_plane(history)
        print(f"Plots saved to {plots.save_dir}")


def export_csv(filepath: str, history: list[dict]) -> None:
    """Write one row per tick."""
    columns = ["tick", "time", "theta", "strength", "x", "y", "z", "magnitude"]
    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns + ["a_re", "a_im", "b_re", "b_im"])
        for h in history:
            writer.writerow(
                [h[c] for c in columns]
                + [h["a"].real, h["a"].imag, h["b"].real, h["b"].imag]
            )

    print(f"History exported to {filepath}")


def run_validation(args: argparse.Namespace) -> bool:
    """Print the validator summary. Returns True when every check passes."""
    validator = Validator(args.theta, args.strength, samples=args.samples)
    summary = validator.summary()
    passed = validator.passes(args.tolerance)

    print("=" * 50)
    print(" VALIDATION")
    print("=" * 50)
    print(f"  theta / strength:    {summary['theta']:.4f} / {summary['strength']:.4f}")
    print(f"  Samples:             {summary['samples']}")
    print(f"  analytical x:        {summary['analytical_x_deviation']:.2e}")
    print(f"  analytical vector:   {summary['analytical_deviation']:.2e}")
    print(f"  magnitude drift:     {summary['magnitude_drift']:.2e}")
    print(f"  periodicity:         {summary['periodicity_error']:.2e}")
    print(f"  propagator vs expm:  {summary['propagator_deviation']:.2e}")
    print("=" * 50)
    print(f"  {'PASS' if passed else 'FAIL'} (tolerance {args.tolerance:g})")
    return passed


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "simulate":
        try:
            run_simulation(args)
        except ValueError as exc:
            parser.error(str(exc))
    elif args.command == "validate":
        try:
            passed = run_validation(args)
        except ValueError as exc:
            parser.error(str(exc))
        if not passed:
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
