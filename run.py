# run.py
from __future__ import annotations
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent / "src"))
from wikitable_extractor.cli import main

if __name__ == "__main__":
    main()
