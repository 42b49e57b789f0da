# -*- coding: utf-8 -*-
"""
audiobook2video/core/boundaries.py

这个文件做什么：
- section 与 shot 共用的边界校验：连续、无缺口、完整覆盖。
- 物化时用到的切片与时间计算。
- 都是纯函数：不读写文件、不调用模型。

关键点：
- 校验严格按给定顺序走，不排序。顺序错了就在第一个不匹配处报错。
"""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Sequence, Tuple

from .errors import BoundaryGapError, CoverageError
from .schemas import Segment, Shot


def _bounds(item: Any) -> Tuple[int, int, str]:
	"""
	支持两种形状：
	- (start, end, label) 三元组
	- 带 start_segment / end_segment / title 属性的对象（Proposal、Section、Shot）
	"""
	if isinstance(item, tuple):
		start, end, label = item
		return int(start), int(end), str(label)

	return int(item.start_segment), int(item.end_segment), str(item.title)


def validate_contiguous_coverage(
	items: Iterable[Any],
	expected_first: int,
	expected_last: int,
	kind: str = "section",
) -> None:
	"""
	- 第 i 项必须从第 i-1 项的 end + 1 开始（第一项从 expected_first 开始）
	- 最后一项必须结束在 expected_last
	"""
	last_end = expected_first - 1
	last_label = ""

	for item in items:
		start, end, label = _bounds(item)
		if start != last_end + 1:
			raise BoundaryGapError(kind, label, expected=last_end + 1, actual=start)

		last_end = end
		last_label = label

	if last_end != expected_last:
		raise CoverageError(kind, last_label, expected=expected_last, actual=last_end)


def slice_segments(segments: Sequence[Segment], start_id: int, end_id: int, base_id: int) -> List[Segment]:
	"""
	按 id 偏移切片：[start_id - base_id, end_id - base_id + 1)。
	越界时按 Python 切片规则截断，可能得到空列表（由调用方决定是否报错）。
	"""
	lo = start_id - base_id
	hi = end_id - base_id + 1
	if lo < 0:
		# 负下标在 Python 里是从尾部数，这里不允许
		if hi <= 0:
			return []
		lo = 0

	return list(segments[lo:hi])


def span_of(segments: Sequence[Segment]) -> Tuple[float, float, float]:
	"""返回 (start, end, duration)，取首尾 segment 的时间。"""
	start = segments[0].start
	end = segments[-1].end
	return start, end, end - start


def sum_shots(shots: Iterable[Shot]) -> Tuple[float, int]:
	duration = 0.0
	segment_count = 0
	for s in shots:
		duration += s.duration
		segment_count += s.segment_count
	return duration, segment_count


def check_sum_invariants(duration: float, segment_count: int, shots: Sequence[Shot], rel_tol: float = 1e-9) -> None:
	"""
	集合级 duration / segmentCount 必须等于成员 shot 的求和。
	"""
	expect_duration, expect_count = sum_shots(shots)

	if segment_count != expect_count:
		raise ValueError(f"segmentCount mismatch: {segment_count} != sum of shots {expect_count}")

	if not math.isclose(duration, expect_duration, rel_tol=rel_tol, abs_tol=1e-6):
		raise ValueError(f"duration mismatch: {duration} != sum of shots {expect_duration}")
