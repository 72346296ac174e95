from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from sepfilt import __version__
from sepfilt.cli.folderbatch import DISPLAY_MODES, register_folderbatch_subcommand
from sepfilt.cli.settings import (
    add_settings_args,
    strip_settings_args,
    detect_command,
    load_settings,
    select_settings,
    apply_settings_to_parser,
    serialize_args,
    save_settings,
    find_subparser,
)
from sepfilt.diagnostics import EQUIVALENCE_TOL, equivalence_report, random_field
from sepfilt.filters import FILTERS, get_filter
from sepfilt.io import read_field, write_field


def _path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_apply(args: argparse.Namespace) -> int:
    in_path = _path(args.input)
    out_path = _path(args.output)
    if not in_path.exists():
        raise SystemExit(f"Input image not found: {in_path}")

    field = read_field(in_path)
    print(f"[apply] {in_path.name} field={field.shape[1]}x{field.shape[0]} filter={args.filter}")

    out = get_filter(args.filter)(field)
    write_field(out_path, out, display=args.display)
    print(f"[apply] range=[{out.min():.4f}, {out.max():.4f}] -> {out_path}")
    if args.save_npy:
        npy_path = out_path.with_suffix(".npy")
        np.save(npy_path, out)
        print(f"[apply] raw float64 -> {npy_path}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    height, width = args.size
    field = random_field(height, width, seed=args.seed)
    print(f"[check] random field {height}x{width} seed={args.seed} tol={EQUIVALENCE_TOL:.0e}")

    failed = 0
    for name, (err, ok) in equivalence_report(field).items():
        print(f"[{'ok' if ok else 'fail'}] {name}: max |err| = {err:.3e}")
        failed += 0 if ok else 1
    return 0 if failed == 0 else 2


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sepfilt",
        description="Separable and non-separable edge, average and Sobel filters.",
    )
    parser.add_argument("--version", action="version", version=f"sepfilt {__version__}")
    add_settings_args(parser)
    sub = parser.add_subparsers(dest="command", required=True)

    p_apply = sub.add_parser("apply", help="Filter a single image.")
    p_apply.add_argument("input", help="Input image (converted to luminance).")
    p_apply.add_argument("output", help="Output image path.")
    p_apply.add_argument(
        "--filter",
        default="sobel",
        choices=sorted(FILTERS),
        help="Filter to apply (default: sobel).",
    )
    p_apply.add_argument(
        "--display",
        default="rescale",
        choices=DISPLAY_MODES,
        help="How the float output is mapped to 8-bit (default: rescale).",
    )
    p_apply.add_argument(
        "--save-npy",
        action="store_true",
        help="Also save the raw float64 result next to the output as .npy.",
    )
    p_apply.set_defaults(func=_cmd_apply)

    p_check = sub.add_parser(
        "check",
        help="Compare separable and non-separable filters on a random field.",
    )
    p_check.add_argument(
        "--size",
        nargs=2,
        type=int,
        default=[32, 24],
        metavar=("H", "W"),
        help="Field height and width (default: 32 24).",
    )
    p_check.add_argument("--seed", type=int, default=0, help="RNG seed (default: 0).")
    p_check.set_defaults(func=_cmd_check)

    register_folderbatch_subcommand(sub)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    cleaned_argv, settings_path, save_path = strip_settings_args(raw_argv)
    command = detect_command(cleaned_argv)

    if settings_path:
        settings_data = load_settings(Path(settings_path))
        settings = select_settings(settings_data, command)
        target = find_subparser(parser, command) or parser
        apply_settings_to_parser(target, settings)

    args = parser.parse_args(cleaned_argv)

    if save_path:
        target = find_subparser(parser, args.command) or parser
        save_settings(Path(save_path), serialize_args(args, target), command=args.command)

    try:
        return args.func(args)
    except ValueError as exc:
        # FilterError and friends: report, do not dump a traceback
        print(f"[error] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
