# -*- coding: utf-8 -*-
"""
gen_shots/validator.py

这个文件做什么：
- 对 LLM 给出的 shot 提案做强校验：形状 + 在 section 范围内连续完整覆盖。
- 任何不合规：直接报错，整个 section 的 shots 作废。
"""

from __future__ import annotations

from typing import Any, List, Sequence

from audiobook2video.core.boundaries import validate_contiguous_coverage
from audiobook2video.core.schemas import parse_proposals

from .schema import RESPONSE_KEY, Proposal, Section


def validate_response_shape(response: Any) -> List[Proposal]:
	return parse_proposals(response, RESPONSE_KEY)


def validate_shot_boundaries(proposals: Sequence[Proposal], section: Section) -> None:
	validate_contiguous_coverage(proposals, section.start_segment, section.end_segment, kind="shot")
