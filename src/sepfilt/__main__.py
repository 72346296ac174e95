"""
Command-line entry for the sepfilt package.

Usage
-----
$ python -m sepfilt
"""

import numpy as np

from . import __version__
from .diagnostics import equivalence_report, random_field
from .filters import sobel


def _diagnostics():
    print(f"sepfilt separable image filters v{__version__}\n")

    field = random_field(24, 17, seed=None)
    print(f"Equivalence check on a random {field.shape[0]}x{field.shape[1]} field:")
    for name, (err, ok) in equivalence_report(field).items():
        print(f"  {name:<20s} max |err| = {err:.2e} {'ok' if ok else 'FAIL'}")

    print("\nSobel sanity check:")
    flat = sobel(np.full((8, 8), 0.5))
    print(f"  constant field -> max magnitude {np.max(flat):.2e}")
    mag = sobel(field)
    print(f"  random field   -> magnitude in [{mag.min():.3f}, {mag.max():.3f}]")


if __name__ == "__main__":
    _diagnostics()
