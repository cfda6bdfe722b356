"""
Command-line diagnostics for the content storage backends.

See `content_backend.diagnostics` for the available commands.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from content_backend.diagnostics import main

if __name__ == "__main__":
    raise SystemExit(main())
