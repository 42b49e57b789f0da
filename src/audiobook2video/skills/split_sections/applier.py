# -*- coding: utf-8 -*-
"""
split_sections/applier.py

这个文件做什么：
- 把已经校验过的 section 提案物化成 Section：按 id 切 segments、算时间。
- 纯函数：输入 -> 输出，不读写文件、不调用模型。
"""

from __future__ import annotations

from typing import List, Sequence

from audiobook2video.core.boundaries import slice_segments, span_of
from audiobook2video.core.errors import EmptySliceError
from audiobook2video.core.schemas import Segment

from .schema import Proposal, Section


def materialize_sections(proposals: Sequence[Proposal], segments: Sequence[Segment]) -> List[Section]:
	base_id = segments[0].id
	out = []

	for p in proposals:
		sec_segments = slice_segments(segments, p.start_segment, p.end_segment, base_id)
		if not sec_segments:
			raise EmptySliceError("section", p.title, p.start_segment, p.end_segment)

		start, end, duration = span_of(sec_segments)
		out.append(
			Section(
				title=p.title,
				description=p.description,
				start=start,
				end=end,
				duration=duration,
				start_segment=p.start_segment,
				end_segment=p.end_segment,
				segment_count=len(sec_segments),
				segments=sec_segments,
			)
		)

	return out
