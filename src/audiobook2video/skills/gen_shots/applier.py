# -*- coding: utf-8 -*-
"""
gen_shots/applier.py

这个文件做什么：
- 把已经校验过的 shot 提案物化成 Shot：从 section.segments 按 id 偏移切片、算时间、拼文本。
- 纯函数：输入 -> 输出，不读写文件、不调用模型。

实现原则：
- 切片为空（提案的 id 落在 section 之外）直接 raise EmptySliceError。
- shot_id 先按 section 内下标编号，combine 时再改成章节级编号。
"""

from __future__ import annotations

from typing import List, Sequence

from audiobook2video.core.boundaries import slice_segments, span_of, sum_shots
from audiobook2video.core.errors import EmptySliceError

from .schema import Proposal, Section, Shot, Shots


def materialize_shots(proposals: Sequence[Proposal], section: Section) -> List[Shot]:
	shots: List[Shot] = []

	for i, p in enumerate(proposals):
		segs = slice_segments(section.segments, p.start_segment, p.end_segment, section.start_segment)
		if not segs:
			raise EmptySliceError("shot", p.title, p.start_segment, p.end_segment)

		start, end, duration = span_of(segs)
		shots.append(
			Shot(
				shot_id=i,
				title=p.title,
				description=p.description,
				text=" ".join(s.text for s in segs),
				start=start,
				end=end,
				duration=duration,
				start_segment=p.start_segment,
				end_segment=p.end_segment,
				segment_count=len(segs),
			)
		)

	return shots


def build_shots(shots: List[Shot]) -> Shots:
	duration, segment_count = sum_shots(shots)
	return Shots(
		duration=duration,
		segment_count=segment_count,
		shot_count=len(shots),
		shots=shots,
	)
