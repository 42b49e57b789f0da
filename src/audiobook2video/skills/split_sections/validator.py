# -*- coding: utf-8 -*-
"""
split_sections/validator.py

这个文件做什么：
- 对 LLM 给出的 section 提案做强校验：形状 + 连续覆盖整章 segments。
- 任何不合规：直接报错，整次分段作废。
"""

from __future__ import annotations

from typing import Any, List, Sequence

from audiobook2video.core.boundaries import validate_contiguous_coverage
from audiobook2video.core.schemas import Segment, parse_proposals

from .schema import RESPONSE_KEY, Proposal


def validate_response_shape(response: Any) -> List[Proposal]:
	return parse_proposals(response, RESPONSE_KEY)


def validate_section_boundaries(proposals: Sequence[Proposal], segments: Sequence[Segment]) -> None:
	if not segments:
		raise ValueError("No segments found in transcript")

	validate_contiguous_coverage(proposals, segments[0].id, segments[-1].id, kind="section")
