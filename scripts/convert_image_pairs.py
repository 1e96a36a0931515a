#!/usr/bin/env python3
"""pairdb image pair conversion runner.

Usage:
    python scripts/convert_image_pairs.py pairs.txt labels_lmdb images_lmdb
    python scripts/convert_image_pairs.py pairs.txt labels_lmdb images_lmdb --shuffle --seed 7
    python scripts/convert_image_pairs.py pairs.txt labels.db images.db --config scripts/user_config.py

Note: User config in scripts/user_config.py, expert defaults in src/pairdb/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from pairdb.cli.convert_pairs import main


if __name__ == "__main__":
    sys.exit(main())
