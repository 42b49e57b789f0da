# -*- coding: utf-8 -*-
"""
audiobook2video/core/schemas/shot.py

Shot：section 内部更细的镜头单元（一个 shot 对应一张图 + 一段镜头运动）。
Shots：section{i}.shots.json 与章节级 shots.json 的共同结构。

shot_id：
- 单个 section 内先编号 0..N-1（临时）
- combine 之后改为章节级 0..M-1（按叙事顺序）

ffmpeg_effects / effects_explanation：
- 后续特效阶段才会写入，这里只负责透传；为 None 时不落盘。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Shot:
	shot_id: int
	title: str
	description: str
	text: str
	start: float
	end: float
	duration: float
	start_segment: int
	end_segment: int
	segment_count: int
	ffmpeg_effects: Optional[str] = None
	effects_explanation: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		d: Dict[str, Any] = {
			"shotId": self.shot_id,
			"title": self.title,
			"description": self.description,
			"text": self.text,
			"start": self.start,
			"end": self.end,
			"duration": self.duration,
			"startSegment": self.start_segment,
			"endSegment": self.end_segment,
			"segmentCount": self.segment_count,
		}
		if self.ffmpeg_effects is not None:
			d["ffmpegEffects"] = self.ffmpeg_effects
		if self.effects_explanation is not None:
			d["effectsExplanation"] = self.effects_explanation
		return d

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Shot":
		return cls(
			shot_id=int(d.get("shotId", 0)),
			title=d.get("title", ""),
			description=d.get("description", ""),
			text=d.get("text", ""),
			start=float(d["start"]),
			end=float(d["end"]),
			duration=float(d["duration"]),
			start_segment=int(d["startSegment"]),
			end_segment=int(d["endSegment"]),
			segment_count=int(d["segmentCount"]),
			ffmpeg_effects=d.get("ffmpegEffects"),
			effects_explanation=d.get("effectsExplanation"),
		)


@dataclass
class Shots:
	"""
	duration / segment_count 必须等于成员 shot 的求和（不是独立计算的）。
	"""
	duration: float
	segment_count: int
	shot_count: int
	shots: List[Shot] = field(default_factory=list)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"duration": self.duration,
			"segmentCount": self.segment_count,
			"shotCount": self.shot_count,
			"shots": [s.to_dict() for s in self.shots],
		}

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "Shots":
		shots = [Shot.from_dict(s) for s in d.get("shots") or []]
		return cls(
			duration=float(d.get("duration", 0.0)),
			segment_count=int(d.get("segmentCount", 0)),
			shot_count=int(d.get("shotCount", len(shots))),
			shots=shots,
		)
