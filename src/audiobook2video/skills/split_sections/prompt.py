# -*- coding: utf-8 -*-
"""
split_sections/prompt.py

这个文件做什么：
- 把整章 transcript + 目标 section 数拼成任务描述，让 LLM 输出 sections JSON。
- 这里不调用模型，只做 prompt 组装。
"""

from __future__ import annotations

import json

from audiobook2video.core.schemas import Transcript

from .schema import SectionsConstraints


SYSTEM_PROMPT = (
	"You are an expert at breaking down long-form content into meaningful sections.\n"
	"Output exactly one JSON object. No explanations, no Markdown, no code fences.\n"
	'Format: {"sections": [{"title": str, "description": str, "startSegment": int, "endSegment": int}]}\n'
)


def build_user_prompt(transcript: Transcript, c: SectionsConstraints) -> str:
	first_id = transcript.first_id
	last_id = transcript.last_id
	per_section = c.segments_per_section(len(transcript.segments))
	tolerance = int(round(c.balance_tolerance * 100))

	rules = (
		f"Analyze the transcript and divide it into approximately {c.target_sections} sections "
		"that form coherent narrative units.\n"
		"\n"
		"Key principles:\n"
		"1. Each section should cover a complete thought, scene, or narrative unit\n"
		f"2. Sections should be roughly balanced in length (target ~{per_section} segments each)\n"
		"3. Section boundaries should occur at natural breaks in the narrative\n"
		"4. Titles should be concise but descriptive\n"
		"5. Descriptions should summarize the key events or concepts\n"
		"\n"
		"Hard requirements:\n"
		"- Every segment must be included exactly once\n"
		"- Segments must be continuous (no gaps or overlaps)\n"
		f"- First section must start with segment {first_id}\n"
		f"- Last section must end with segment {last_id}\n"
		f"- Each section should be within ±{tolerance}% of the target length ({per_section} segments) "
		"unless there's a compelling narrative reason\n"
	)

	payload = {
		"segmentCount": len(transcript.segments),
		"segments": [s.to_dict() for s in transcript.segments],
	}

	return rules + "\nTranscript (JSON):\n" + json.dumps(payload, ensure_ascii=False)
