# -*- coding: utf-8 -*-
"""
split_sections/schema.py

- Proposal / Section：从 core.schemas 导入（共享契约）。
- SectionsConstraints：split_sections 专用，定义于此。
"""

from __future__ import annotations

from dataclasses import dataclass

from audiobook2video.core.schemas import Proposal, Section, Sections


__all__ = ["Proposal", "Section", "Sections", "SectionsConstraints", "RESPONSE_KEY"]

RESPONSE_KEY = "sections"


@dataclass
class SectionsConstraints:
	"""
	target_sections：
	- 期望的 section 数（默认 10）
	- 只用来引导 LLM，不校验数量

	balance_tolerance：
	- 每个 section 的长度允许偏离平均值的比例（写进 prompt，同样不校验）
	"""
	target_sections: int = 10
	balance_tolerance: float = 0.25

	def segments_per_section(self, total_segments: int) -> int:
		return max(1, total_segments // max(1, self.target_sections))
