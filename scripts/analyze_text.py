#!/usr/bin/env python3
"""
Run the conshus text heuristics from a checkout without installing it.

Usage:
  python scripts/analyze_text.py events "Dentist on 2025-09-02"
  python scripts/analyze_text.py repeat "every last friday of the month" --today 2024-06-10
"""
import sys
from pathlib import Path


def _ensure_project_on_path():
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_ensure_project_on_path()

from conshus.cli import main  # noqa: E402


if __name__ == '__main__':
    raise SystemExit(main())
