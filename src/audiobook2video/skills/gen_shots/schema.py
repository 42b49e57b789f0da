# -*- coding: utf-8 -*-
"""
gen_shots/schema.py

- Proposal / Section / Shot / Shots：从 core.schemas 导入（共享契约）。
- ShotsConstraints：gen_shots 专用，定义于此。
"""

from __future__ import annotations

from dataclasses import dataclass

from audiobook2video.core.schemas import Proposal, Section, Shot, Shots


__all__ = ["Proposal", "Section", "Shot", "Shots", "ShotsConstraints", "RESPONSE_KEY"]

RESPONSE_KEY = "shots"


@dataclass
class ShotsConstraints:
	"""
	segments_per_shot：
	- 大约每几个 segment 一个 shot（默认 4）
	- 只写进 prompt 引导节奏，不做数量校验
	"""
	segments_per_shot: int = 4
