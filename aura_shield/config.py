from __future__ import annotations

import json
import os

DEFAULT_CONFIG_PATH = "shield_config.json"

DEFAULT_ENERGY_TYPES = ["Guardian", "Empath", "Seeker", "Catalyst"]

DEFAULT_PALETTE = [
    0x3366FF,  # blue
    0x8A2BE2,  # violet
    0x00C896,  # jade
    0xFFB000,  # amber
    0xFF3B5C,  # ember
]

DEFAULT_SYMBOLS = ["flame", "eye", "spiral"]


def load_config(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)
