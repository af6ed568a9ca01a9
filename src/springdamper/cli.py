"""
Command-line interface for previewing spring responses.

Usage:
    springdamper-preview [options]
    python -m springdamper [options]
"""

import argparse
import sys
from pathlib import Path

from springdamper.config import PRESETS, PreviewConfig, SpringConfig
from springdamper.core.integrator import SpringMode
from springdamper.errors import SpringError
from springdamper.io.exporter import ResponseExporter
from springdamper.logging_config import setup_logging
from springdamper.preview import reference_response, sample_response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="springdamper-preview",
        description="Sample the step response of a damped spring",
    )

    # Parameters
    parser.add_argument(
        "-p", "--preset", type=str, default="default",
        choices=sorted(PRESETS),
        help="Named parameter set (default: default)",
    )
    parser.add_argument("-f", "--frequency", type=float, default=None, help="Natural frequency in Hz (overrides preset)")
    parser.add_argument("-z", "--damping", type=float, default=None, help="Damping ratio (overrides preset)")
    parser.add_argument("-r", "--response", type=float, default=None, help="Initial-response ratio (overrides preset)")
    parser.add_argument(
        "--mode", type=str, default=SpringMode.LINEAR.value,
        choices=[m.value for m in SpringMode],
        help="Step function (default: linear)",
    )

    # Sampling
    parser.add_argument(
        "--duration", type=float, default=PreviewConfig.duration,
        help=f"Preview length in seconds (default: {PreviewConfig.duration})",
    )
    parser.add_argument(
        "--rate", type=float, default=PreviewConfig.samples_per_second,
        help=f"Steps per second (default: {PreviewConfig.samples_per_second:g})",
    )
    parser.add_argument(
        "--target", type=float, default=PreviewConfig.target,
        help=f"Step target, starting from 0 (default: {PreviewConfig.target})",
    )

    # Output
    parser.add_argument("--reference", action="store_true", help="Include the ideal continuous response")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the sampled curve as JSON to this path",
    )
    parser.add_argument("--precision", type=int, default=4, help="Decimal places in JSON output (default: 4)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress the summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    spring_cfg = SpringConfig.from_preset(args.preset, mode=args.mode)
    if args.frequency is not None:
        spring_cfg.frequency = args.frequency
    if args.damping is not None:
        spring_cfg.damping = args.damping
    if args.response is not None:
        spring_cfg.response = args.response

    preview_cfg = PreviewConfig(
        duration=args.duration,
        samples_per_second=args.rate,
        target=args.target,
    )

    try:
        settings = spring_cfg.to_settings()
        curve = sample_response(
            settings,
            duration=preview_cfg.duration,
            samples_per_second=preview_cfg.samples_per_second,
            target=preview_cfg.target,
            mode=spring_cfg.mode,
        )
    except SpringError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    reference = None
    if args.reference:
        reference = reference_response(settings, curve.times, target=preview_cfg.target)

    if not args.quiet:
        print(f"F={spring_cfg.frequency:g}Hz  Z={spring_cfg.damping:g}  R={spring_cfg.response:g}  ({spring_cfg.mode})")
        print(f"k1={settings.k1:.6g}  k2={settings.k2:.6g}  k3={settings.k3:.6g}")
        print(f"Samples: {curve.n_samples} x {curve.dt:.4g}s")
        print(f"Min: {curve.minimum:.4f}  Max: {curve.maximum:.4f}  Final: {curve.final:.4f}")
        print(f"Overshoot: {curve.overshoot:.4f}")
        settle = curve.settling_time()
        print(f"Settling (2%): {'never' if settle is None else f'{settle:.3f}s'}")
        if reference is not None:
            max_err = float(abs(curve.positions - reference).max())
            print(f"Max deviation from ideal: {max_err:.5f}")

    if args.output is not None:
        exporter = ResponseExporter(precision=args.precision)
        document = exporter.build_document(curve, settings, reference=reference)
        path = exporter.export_json(document, args.output)
        if not args.quiet:
            print(f"Output: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
