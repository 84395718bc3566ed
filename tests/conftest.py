"""Pytest bootstrap to ensure the src layout is importable without installation."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

for path in (ROOT / "src", ROOT / "tests"):
    if path.exists() and str(path) not in sys.path:
        sys.path.insert(0, str(path))
