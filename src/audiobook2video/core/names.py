# -*- coding: utf-8 -*-
"""
audiobook2video/core/names.py

director 目录名：形如 director-swift_falcon 的好记名字。
- 只在 CLI 没有传 --director 时生成一次，之后一律显式传递。
"""

from __future__ import annotations

import random
from typing import Optional

ADJECTIVES = [
	"swift", "clever", "wise", "brave", "mighty",
	"gentle", "fierce", "noble", "bright", "calm",
	"bold", "eager", "kind", "proud", "wild",
	"misty", "stormy", "sunny", "windy", "icy",
	"fiery", "cosmic", "lunar", "astral", "golden",
	"silver", "azure", "crimson", "emerald", "amber",
	"copper", "indigo", "scarlet", "violet", "serene",
	"dreamy", "lively", "tranquil", "autumn", "winter",
	"spring", "summer", "dawn", "dusk", "twilight",
]

ANIMALS = [
	"falcon", "eagle", "owl", "hawk", "raven",
	"crane", "swan", "heron", "sparrow", "finch",
	"tiger", "wolf", "bear", "lion", "lynx",
	"puma", "leopard", "jaguar", "panther", "fox",
	"deer", "hare", "elk", "gazelle", "bison",
	"dolphin", "seal", "orca", "whale", "narwhal",
	"dragon", "griffin", "unicorn", "sphinx", "kraken",
]


def generate_memorable(prefix: str = "director-", rng: Optional[random.Random] = None) -> str:
	r = rng or random.Random()
	return f"{prefix}{r.choice(ADJECTIVES)}_{r.choice(ANIMALS)}"
