# -*- coding: utf-8 -*-
"""
audiobook2video/core/schemas/section.py

Section：一段连续的 segments，对应一个叙事单元。
Sections：sections.json 的整体结构 {duration, sectionCount, sections}。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .segment import Segment


@dataclass
class Section:
	title: str
	description: str
	start: float
	end: float
	duration: float
	start_segment: int
	end_segment: int
	segment_count: int
	segments: List[Segment] = field(default_factory=list)

	@property
	def text(self) -> str:
		return " ".join(s.text for s in self.segments)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"title": self.title,
			"description": self.description,
			"start": self.start,
			"end": self.end,
			"duration": self.duration,
			"startSegment": self.start_segment,
			"endSegment": self.end_segment,
			"segmentCount": self.segment_count,
			"segments": [s.to_dict() for s in self.segments],
		}

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Section":
		segments = [Segment.from_dict(s) for s in d.get("segments") or []]
		return cls(
			title=d.get("title", ""),
			description=d.get("description", ""),
			start=float(d["start"]),
			end=float(d["end"]),
			duration=float(d["duration"]),
			start_segment=int(d["startSegment"]),
			end_segment=int(d["endSegment"]),
			segment_count=int(d.get("segmentCount", len(segments))),
			segments=segments,
		)


@dataclass
class Sections:
	duration: float
	section_count: int
	sections: List[Section] = field(default_factory=list)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"duration": self.duration,
			"sectionCount": self.section_count,
			"sections": [s.to_dict() for s in self.sections],
		}

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Sections":
		sections = [Section.from_dict(s) for s in d.get("sections") or []]
		return cls(
			duration=float(d.get("duration", 0.0)),
			section_count=int(d.get("sectionCount", len(sections))),
			sections=sections,
		)
