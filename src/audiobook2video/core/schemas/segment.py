# -*- coding: utf-8 -*-
"""
audiobook2video/core/schemas/segment.py

Segment：转写阶段产出的最小时间片（外部输入，只读）。
- 所有 section/shot 的 start/end/duration 都从这里按 id 反查得到。
- Transcript 对应 chapter 目录下的 transcript.json。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Segment:
	id: int
	start: float
	end: float
	text: str

	def to_dict(self) -> Dict[str, Any]:
		return {"id": self.id, "start": self.start, "end": self.end, "text": self.text}

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Segment":
		return cls(
			id=int(d["id"]),
			start=float(d["start"]),
			end=float(d["end"]),
			text=str(d.get("text", "")),
		)


@dataclass
class Transcript:
	"""
	一个章节的转写结果。

	segments 必须按 id 连续（通常从 0 开始），start 严格递增。
	"""
	duration: float
	segment_count: int
	segments: List[Segment] = field(default_factory=list)
	text: str = ""

	@property
	def first_id(self) -> int:
		return self.segments[0].id

	@property
	def last_id(self) -> int:
		return self.segments[-1].id

	def to_dict(self) -> Dict[str, Any]:
		return {
			"duration": self.duration,
			"segmentCount": self.segment_count,
			"segments": [s.to_dict() for s in self.segments],
			"text": self.text,
		}

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Transcript":
		segments = [Segment.from_dict(s) for s in d.get("segments") or []]
		text = d.get("text")
		if text is None:
			text = " ".join(s.text for s in segments)

		return cls(
			duration=float(d.get("duration", segments[-1].end if segments else 0.0)),
			segment_count=int(d.get("segmentCount", len(segments))),
			segments=segments,
			text=text,
		)


def check_segment_store(segments: List[Segment]) -> None:
	"""
	转写输入的前置检查：
	- 非空
	- id 连续（每个 id = 上一个 + 1）
	- end > start，且 start 严格递增
	"""
	if not segments:
		raise ValueError("No segments found in transcript")

	prev = None
	for seg in segments:
		if seg.end <= seg.start:
			raise ValueError(f"segment {seg.id}: end ({seg.end}) must be greater than start ({seg.start})")

		if prev is not None:
			if seg.id != prev.id + 1:
				raise ValueError(f"segment ids not contiguous: {prev.id} followed by {seg.id}")
			if seg.start <= prev.start:
				raise ValueError(f"segment {seg.id}: start ({seg.start}) is not after segment {prev.id} start ({prev.start})")

		prev = seg
