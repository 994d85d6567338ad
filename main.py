"""Run the `kitsu` CLI from a source checkout: `python -m main airing`.

An installed package gets the `kitsu` console script instead. Here the
`src/` directory is put on `sys.path` first so `cli`, `core` and `adapters`
import without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run

    run()


if __name__ == "__main__":
    main()
