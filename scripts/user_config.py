"""pairdb user configuration.

This is the user-facing configuration file. Modify settings here to customize
the conversion. Expert defaults are in src/pairdb/schemas/param.py

Usage:
    python scripts/convert_image_pairs.py pairs.txt labels_db images_db --config scripts/user_config.py
"""

CONFIG = {
    # ========================================================================
    # MANIFEST & ORDERING
    # ========================================================================
    "DELIMITER": "space",     # "space", "tab" or "comma"
    "SHUFFLE": False,         # Randomly permute records before key assignment
    "SEED": None,             # Shuffle seed (None = different order each run)

    # ========================================================================
    # IMAGES
    # ========================================================================
    "ROOT_DIR": "",           # Prepended to every manifest path
    "GRAYSCALE": False,
    "RESIZE_HEIGHT": 0,       # 0 = keep original size
    "RESIZE_WIDTH": 0,
    "ENCODED": False,         # Store encoded files instead of raw pixels
    "ENCODE_TYPE": "",        # "png", "jpg", ... (implies ENCODED)
    "CHECK_SIZE": False,      # All image payloads must have the same size

    # ========================================================================
    # STORES
    # ========================================================================
    "BACKEND": "lmdb",        # "lmdb" or "sqlite"
    "BATCH_SIZE": 1000,       # Puts per commit
    "ORPHAN_LABELS": "keep",  # "drop" = no label when the image pair fails
}
