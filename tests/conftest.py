# -*- coding: utf-8 -*-
"""测试共用的假 LLM 与 transcript 构造。"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from audiobook2video.core.schemas import Segment, Transcript


class FakeLLM:
	"""按调用顺序返回预设的 JSON；记录每次收到的 prompt。"""

	def __init__(self, responses: List[Dict[str, Any]]):
		self.responses = list(responses)
		self.calls: List[tuple] = []

	def chat_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
		self.calls.append((system_prompt, user_prompt))
		if not self.responses:
			raise AssertionError("FakeLLM: no more responses")
		return self.responses.pop(0)


def make_segments(n: int, first: int = 0) -> List[Segment]:
	"""第 i 个 segment：start = 2i, end = 2i + 1.5。"""
	return [
		Segment(id=first + i, start=i * 2.0, end=i * 2.0 + 1.5, text=f"s{first + i}")
		for i in range(n)
	]


def make_transcript(n: int, first: int = 0) -> Transcript:
	segs = make_segments(n, first)
	return Transcript(
		duration=segs[-1].end,
		segment_count=len(segs),
		segments=segs,
		text=" ".join(s.text for s in segs),
	)


def proposal(start: int, end: int, title: str = "") -> Dict[str, Any]:
	return {
		"title": title or f"p{start}-{end}",
		"description": f"covers {start}..{end}",
		"startSegment": start,
		"endSegment": end,
	}


def write_transcript(root: Path, book: str, chapter: str, n: int) -> Path:
	p = root / "audiobooks" / book / chapter / "transcript.json"
	p.parent.mkdir(parents=True, exist_ok=True)
	p.write_text(json.dumps(make_transcript(n).to_dict()), encoding="utf-8")
	return p


@pytest.fixture
def transcript12() -> Transcript:
	return make_transcript(12)
