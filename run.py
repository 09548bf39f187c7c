"""Convenience runner for local development without editable install."""
from __future__ import annotations

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

from report_scanner.cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
