"""
Command-line entry point: smooth a recorded transform track.

Usage:
    python -m oneeuro.main --input recording.csv --output filtered.csv
    python -m oneeuro.main --input recording.csv --preset responsive --plot track.png
"""

import argparse
import logging
import math
from dataclasses import replace
from pathlib import Path

import numpy as np

from .axes import IDENTITY
from .config import PRESET_NAMES, FilterParameters, get_preset_config
from .data_loader import TransformTrack, load_track, save_track
from .diagnostics import ValidationIssue
from .driver import TransformSmoother
from .metrics import angular_jitter, compute_metrics
from .visualization import plot_track_comparison


def apply_overrides(parameters: FilterParameters, args: argparse.Namespace) -> FilterParameters:
    """Replace preset values with the ones given on the command line."""
    overrides = {
        "frequency": args.frequency,
        "min_cutoff": args.min_cutoff,
        "beta": args.beta,
        "derivative_cutoff": args.derivative_cutoff,
    }
    return replace(parameters, **{k: v for k, v in overrides.items() if v is not None})


def smooth_track(track: TransformTrack, smoother: TransformSmoother) -> TransformTrack:
    """Run every frame of `track` through `smoother`."""
    n_frames = track.n_frames
    rotations = track.rotations
    if rotations is None:
        rotations = np.tile(np.array(IDENTITY, dtype=np.float64), (n_frames, 1))

    filtered_positions = np.empty_like(track.positions)
    filtered_rotations = np.empty_like(rotations)

    for i in range(n_frames):
        position, rotation = smoother.update(
            track.positions[i], rotations[i], float(track.timestamps[i])
        )
        filtered_positions[i] = position
        filtered_rotations[i] = rotation

    return TransformTrack(
        timestamps=track.timestamps,
        positions=filtered_positions,
        rotations=filtered_rotations if track.rotations is not None else None,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Adaptive one-euro smoothing of recorded position/rotation tracks"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="CSV recording (timestamp, px, py, pz[, qx, qy, qz, qw])",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path for the filtered CSV",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Path for a raw vs filtered position plot",
    )
    parser.add_argument(
        "--preset",
        type=str,
        choices=PRESET_NAMES,
        default="default",
        help="Parameter preset",
    )
    parser.add_argument("--frequency", type=float, default=None, help="Override sampling frequency (Hz)")
    parser.add_argument("--min-cutoff", type=float, default=None, help="Override minimum cutoff (Hz)")
    parser.add_argument("--beta", type=float, default=None, help="Override speed coefficient")
    parser.add_argument(
        "--derivative-cutoff", type=float, default=None, help="Override derivative cutoff (Hz)"
    )
    parser.add_argument(
        "--ignore-timestamps",
        action="store_true",
        help="Use the configured frequency instead of estimating it from timestamps",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress verbose output",
    )
    parser.add_argument(
        "--verbose-diagnostics",
        action="store_true",
        help="Log every corrected parameter or coefficient",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose_diagnostics else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    verbose = not args.quiet

    # Load configuration
    config = get_preset_config(args.preset)
    config.position = apply_overrides(config.position, args)
    config.rotation = apply_overrides(config.rotation, args)
    config.use_timestamps = not args.ignore_timestamps

    if verbose:
        print(f"Using preset '{args.preset}': {config.position}")

    # Load data
    track = load_track(args.input)
    if verbose:
        rotation_note = "with rotations" if track.rotations is not None else "positions only"
        print(f"Loaded {track.n_frames} frames ({rotation_note})")

    smoother = TransformSmoother(config)
    result = smooth_track(track, smoother)

    sample_rate = track.sample_rate
    if not math.isfinite(sample_rate):
        sample_rate = config.position.frequency

    metrics = compute_metrics(track.positions, result.positions, sample_rate)

    if verbose:
        print(f"\n{'─'*60}")
        print("Results")
        print(f"{'─'*60}")
        print(f"  Sample rate: {sample_rate:.1f} Hz")
        print(f"  Jitter reduction: {metrics['jitter_reduction']:.1f}x")
        print(f"  RMSE vs raw: {metrics['rmse']:.4f}")
        print(f"  Lag: {metrics['lag_s'] * 1000:.1f} ms")
        if track.rotations is not None:
            raw_jitter = angular_jitter(track.rotations)
            filtered_jitter = angular_jitter(result.rotations)
            print(
                f"  Angular step: {np.degrees(raw_jitter):.3f}° raw, "
                f"{np.degrees(filtered_jitter):.3f}° filtered"
            )

    diagnostics = smoother.diagnostics
    if diagnostics.total > 0:
        print(
            f"  Warning: {diagnostics.total} corrected values "
            f"({diagnostics.count(ValidationIssue.NON_POSITIVE_FREQUENCY)} frequency, "
            f"{diagnostics.count(ValidationIssue.NON_POSITIVE_CUTOFF)} cutoff)"
        )

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_track(result, output_path)
        if verbose:
            print(f"  Filtered track saved to: {output_path}")

    if args.plot:
        plot_track_comparison(
            track.timestamps,
            track.positions,
            result.positions,
            labels=["x", "y", "z"],
            title=f"Position ({args.preset})",
            output_path=args.plot,
        )
        if verbose:
            print(f"  Plot saved to: {args.plot}")


if __name__ == "__main__":
    main()
