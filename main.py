#!/usr/bin/env python3
# /hecto/main.py
"""
Hecto launcher for a source checkout.

Makes the ``src`` layout importable without installation, then hands over to
:func:`hecto.main.start`. Installed copies use the ``hecto`` console script.
"""

import os
import sys


# Ensure the 'hecto' package is importable when running from the repository root.
src_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_root not in sys.path:
    sys.path.insert(0, src_root)

from hecto.main import start  # noqa: E402


if __name__ == "__main__":
    start()
