# src/sepfilt/cli/filter_demo.py
"""Command-line demo: every registered filter on one image.
Usage:
    python -m sepfilt.cli.filter_demo INPUT_PATH OUTPUT_DIR [--display MODE] [--only NAME ...]
Saves results to OUTPUT_DIR/<image>_<filter>.png.
"""
import os

import click
import imageio.v3 as iio

from sepfilt.filters import FILTERS
from sepfilt.io import as_uint8, read_field, to_display


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_dir")
@click.option("--display", default="rescale", type=click.Choice(["rescale", "clip", "abs"]), show_default=True)
@click.option("--only", multiple=True, type=click.Choice(sorted(FILTERS)), help="Restrict to these filters.")
def main(input_path, output_dir, display, only):

    # --- Load input as a luminance field in [0, 1] ---
    field = read_field(input_path)
    os.makedirs(output_dir, exist_ok=True)
    base = os.path.splitext(os.path.basename(input_path))[0]

    names = list(only) if only else sorted(FILTERS)
    for name in names:
        out = FILTERS[name](field)
        out_path = os.path.join(output_dir, f"{base}_{name}.png")
        iio.imwrite(out_path, as_uint8(to_display(out, mode=display)))
        click.echo(f"Saved {name:<26s} range=[{out.min():+.4f}, {out.max():+.4f}] → {out_path}")

    click.echo(f"All results stored in: {output_dir}")


if __name__ == "__main__":
    main()
