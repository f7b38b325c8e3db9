# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path

# Ensure src/ and the project root are on sys.path for test imports like
# `import nbt_tree` and `from tests.fakes.nbt_builder import encode`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

for root in (SRC_ROOT, PROJECT_ROOT):
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
