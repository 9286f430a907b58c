from __future__ import annotations

import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    repo_root = Path(__file__).resolve().parents[2]
    src = repo_root / "flicker-harness" / "src"
    src_str = str(src)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

    # Shared trace builders live in `tests/unit/flicker_fakes.py`.
    fakes_root = Path(__file__).resolve().parent / "unit"
    fakes_root_str = str(fakes_root)
    if fakes_root.is_dir() and fakes_root_str not in sys.path:
        sys.path.insert(0, fakes_root_str)


_ensure_src_on_path()
