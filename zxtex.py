#!/usr/bin/env python3
"""
zxtex.py
Convert images to ZX Spectrum palette hex sprite text and back.

Usage:
  python zxtex.py INPUT [--width N] [--output PATH] [--raw]
                  [--transparent-color HEX] [--transparent-index N]
                  [--outdir DIR] [--jobs N] [--debug]

Input:
  Image (.png .gif .bmp .jpg .jpeg): written as hex text, to stdout unless
  --output is given. Row mode by default, --raw for a single line.
  Text (.txt .hex): decoded to PNG named by --output, the '# file:' header, or out.png.
  Directory: every image converted to <stem>.txt (in --outdir if given).
  Anything else: decoded as a literal hex string; --width is required.

Notes:
  The package lives in zxtex/; this file only runs its CLI from a checkout.
  Installed copies get the same command as `zxtex`.
"""

from __future__ import annotations

import sys

from zxtex.cli import main

if __name__ == "__main__":
    sys.exit(main())
