from __future__ import annotations

import argparse
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from sepfilt.filters import FILTERS, get_filter
from sepfilt.io import read_field, write_field

IMAGE_EXTS = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp")
DISPLAY_MODES = ("rescale", "clip", "abs")


@dataclass(frozen=True)
class FilterJob:
    image_path: Path
    filter_name: str
    out_path: Path
    display: str


def _path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


def _find_images(root: Path, recursive: bool) -> List[Path]:
    if not root.exists():
        return []
    globber = root.rglob("*") if recursive else root.glob("*")
    return sorted(p for p in globber if p.is_file() and p.suffix.lower() in IMAGE_EXTS)


def plan_jobs(
    images: List[Path],
    in_dir: Path,
    out_dir: Path,
    filter_names: List[str],
    *,
    display: str = "rescale",
    overwrite: bool = False,
) -> Tuple[List[FilterJob], int]:
    """
    One job per (image, filter). Outputs mirror the input tree under
    ``out_dir/<filter>/``. Returns (jobs, skipped count).
    """
    jobs: List[FilterJob] = []
    skipped = 0
    for img in images:
        rel = img.relative_to(in_dir).with_suffix(".png")
        for name in filter_names:
            out_path = out_dir / name / rel
            if out_path.exists() and not overwrite:
                skipped += 1
                continue
            jobs.append(FilterJob(img, name, out_path, display))
    return jobs, skipped


def run_job(job: FilterJob) -> Tuple[bool, str, float]:
    t0 = time.perf_counter()
    label = f"{job.image_path.name} [{job.filter_name}]"
    try:
        field = read_field(job.image_path)
        out = get_filter(job.filter_name)(field)
        write_field(job.out_path, out, display=job.display)
    except Exception as exc:  # noqa: BLE001
        # one bad file must not abort the batch
        return False, f"{label}: {exc}", time.perf_counter() - t0
    return True, f"{label} -> {job.out_path}", time.perf_counter() - t0


def _add_folderbatch_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input_dir", help="Folder with input images.")
    parser.add_argument("output_dir", help="Folder receiving <filter>/<image>.png.")
    parser.add_argument(
        "--filters",
        nargs="+",
        default=["sobel"],
        choices=sorted(FILTERS),
        help="Filters to run on every image (default: sobel).",
    )
    parser.add_argument(
        "--display",
        default="rescale",
        choices=DISPLAY_MODES,
        help="How filter outputs are mapped to 8-bit (default: rescale).",
    )
    parser.add_argument("--recursive", action="store_true", help="Descend into subfolders.")
    parser.add_argument("--overwrite", action="store_true", help="Recompute existing outputs.")
    parser.add_argument("--jobs", type=int, default=1, help="Worker processes (default: 1).")
    parser.add_argument("--dry-run", action="store_true", help="List planned outputs and exit.")


def _cmd_folderbatch(args: argparse.Namespace) -> int:
    in_dir = _path(args.input_dir)
    out_dir = _path(args.output_dir)
    if not in_dir.is_dir():
        raise SystemExit(f"Input folder not found: {in_dir}")
    if args.jobs < 1:
        raise SystemExit("--jobs must be >= 1")

    images = _find_images(in_dir, args.recursive)
    jobs, skipped = plan_jobs(
        images,
        in_dir,
        out_dir,
        list(args.filters),
        display=args.display,
        overwrite=args.overwrite,
    )

    print(f"[config] in_dir={in_dir}")
    print(f"[config] out_dir={out_dir}")
    print(f"[config] images={len(images)} filters={','.join(args.filters)} jobs={args.jobs}")
    print(f"[config] queued={len(jobs)} skipped={skipped}")

    if args.dry_run:
        for job in jobs:
            print(f"[dry-run] {job.image_path.name} [{job.filter_name}] -> {job.out_path}")
        return 0

    ok = 0
    failed = 0
    t0 = time.perf_counter()

    def _report(result: Tuple[bool, str, float]) -> None:
        nonlocal ok, failed
        success, msg, seconds = result
        if success:
            ok += 1
            print(f"[ok] {msg} ({seconds:.2f}s)")
        else:
            failed += 1
            print(f"[fail] {msg} ({seconds:.2f}s)")

    if args.jobs == 1:
        for job in jobs:
            _report(run_job(job))
    else:
        with ProcessPoolExecutor(max_workers=args.jobs) as pool:
            futures = [pool.submit(run_job, job) for job in jobs]
            for fut in as_completed(futures):
                _report(fut.result())

    total = time.perf_counter() - t0
    print(f"[done] ok={ok} failed={failed} skipped={skipped} total={total:.1f}s")
    return 0 if failed == 0 else 2


def register_folderbatch_subcommand(
    subparsers: argparse._SubParsersAction,
) -> None:
    p = subparsers.add_parser(
        "folderbatch",
        help="Run one or more filters over every image in a folder.",
    )
    _add_folderbatch_args(p)
    p.set_defaults(func=_cmd_folderbatch)
