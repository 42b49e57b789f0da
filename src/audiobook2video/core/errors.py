# -*- coding: utf-8 -*-
"""
audiobook2video/core/errors.py

分段/分镜的错误类型：
- BoundaryGapError：某一项没有紧接上一项的 endSegment + 1 开始
- CoverageError：最后一项没有恰好结束在预期的最后一个 segment id
- EmptySliceError：声明的 segment 范围切出来是空的
- MissingInputError：combine 时找不到某个 section 的 shots 文件

这些错误都是致命的：不在 core 内部捕获，也不写出部分结果。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PartitionError(ValueError):
	"""
	label：出错的 section/shot 标题（便于人工回查 LLM 输出）
	expected/actual：边界 id（预期值 / 实际值）
	"""

	def __init__(self, message: str, label: str = "", expected: Optional[int] = None, actual: Optional[int] = None):
		super().__init__(message)
		self.label = label
		self.expected = expected
		self.actual = actual


class BoundaryGapError(PartitionError):
	def __init__(self, kind: str, label: str, expected: int, actual: int):
		super().__init__(
			f'Gap detected before {kind} "{label}" (expected segment {expected}, got {actual})',
			label=label,
			expected=expected,
			actual=actual,
		)


class CoverageError(PartitionError):
	def __init__(self, kind: str, label: str, expected: int, actual: int):
		super().__init__(
			f'Incomplete coverage: last {kind} "{label}" ended at segment {actual}, expected {expected}',
			label=label,
			expected=expected,
			actual=actual,
		)


class EmptySliceError(PartitionError):
	def __init__(self, kind: str, label: str, start_segment: int, end_segment: int):
		super().__init__(
			f'No segments found for {kind} "{label}" between segments {start_segment} and {end_segment}',
			label=label,
			expected=start_segment,
			actual=end_segment,
		)
		self.start_segment = start_segment
		self.end_segment = end_segment


class MissingInputError(FileNotFoundError):
	def __init__(self, section_id: int, path: Union[str, Path]):
		super().__init__(f"Section {section_id} shots file not found: {path}")
		self.section_id = section_id
		self.path = Path(path)
