# -*- coding: utf-8 -*-
"""
audiobook2video/core/schemas/proposal.py

Proposal：LLM 给出的一条边界建议（section 或 shot 通用）。
- 只有 title/description/startSegment/endSegment 四个字段。
- 不可信：parse_proposals 只检查形状，边界是否合理交给 core.boundaries。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Proposal:
	title: str
	description: str
	start_segment: int
	end_segment: int

	def to_dict(self) -> Dict[str, Any]:
		return {
			"title": self.title,
			"description": self.description,
			"startSegment": self.start_segment,
			"endSegment": self.end_segment,
		}


def _as_int(v: Any, where: str) -> int:
	# bool 是 int 的子类，要单独排除；3.0 这种整数值浮点可以接受
	if isinstance(v, bool):
		raise ValueError(f"{where} must be an integer")
	if isinstance(v, int):
		return v
	if isinstance(v, float) and v.is_integer():
		return int(v)
	raise ValueError(f"{where} must be an integer")


def parse_proposals(data: Any, key: str) -> List[Proposal]:
	"""
	把 LLM 返回的 {"<key>": [{title, description, startSegment, endSegment}, ...]}
	解析成 Proposal 列表。形状不对直接 raise ValueError。
	"""
	if not isinstance(data, dict):
		raise ValueError("response must be a JSON object")

	if key not in data:
		raise ValueError(f"missing key: {key}")

	items = data[key]
	if not isinstance(items, list):
		raise ValueError(f"{key} must be a list")

	out = []
	for i, it in enumerate(items):
		where = f"{key}[{i}]"
		if not isinstance(it, dict):
			raise ValueError(f"{where} must be an object")

		for k in ("title", "description", "startSegment", "endSegment"):
			if k not in it:
				raise ValueError(f"{where} missing key: {k}")

		if not isinstance(it["title"], str) or not isinstance(it["description"], str):
			raise ValueError(f"{where}: title/description must be strings")

		out.append(
			Proposal(
				title=it["title"],
				description=it["description"],
				start_segment=_as_int(it["startSegment"], f"{where}.startSegment"),
				end_segment=_as_int(it["endSegment"], f"{where}.endSegment"),
			)
		)

	return out


def proposals_to_response(key: str, proposals: List[Proposal]) -> Dict[str, Any]:
	return {key: [p.to_dict() for p in proposals]}
