from __future__ import annotations

import sys
from pathlib import Path


# Allow `import corkscrew`, `import config`, etc when running `pytest` from repo root.
HELIX_DIR = Path(__file__).resolve().parents[1]
if str(HELIX_DIR) not in sys.path:
    sys.path.insert(0, str(HELIX_DIR))
