# -*- coding: utf-8 -*-
"""
gen_shots/prompt.py

这个文件做什么：
- 把单个 section 的标题、全文、segment 范围拼成任务描述，让 LLM 输出 shots JSON。
- 这里不调用模型，只做 prompt 组装。

关键点：
- 第一个 shot 必须从 section.startSegment 开始，最后一个必须结束在 section.endSegment。
"""

from __future__ import annotations

from .schema import Section, ShotsConstraints


SYSTEM_PROMPT = (
	"You are a graphic novel artist and visual storyteller. Your task is to break down "
	"narrative text into distinct shots that will form a compelling visual sequence.\n"
	"Output exactly one JSON object. No explanations, no Markdown, no code fences.\n"
	'Format: {"shots": [{"title": str, "description": str, "startSegment": int, "endSegment": int}]}\n'
)


def build_user_prompt(section: Section, c: ShotsConstraints) -> str:
	return (
		"Break down this section into a sequence of continuous camera shots. "
		f"The section has segments numbered from {section.start_segment} to {section.end_segment}.\n"
		"\n"
		"Key requirements for shots:\n"
		"1. Each shot must cover a continuous sequence of segments with NO GAPS\n"
		"2. Each shot must start immediately after the previous shot's end segment\n"
		"3. Each shot should be visually striking and memorable\n"
		f"4. Aim for approximately 1 shot every {c.segments_per_shot} segments to maintain a good narrative pace\n"
		"5. Shot boundaries should align with dramatic moments, key actions, or shifts in dialogue\n"
		"\n"
		"For each shot, provide:\n"
		"- title: a brief, descriptive title for the shot\n"
		"- description: the shot's visual composition (camera angle, poses, expressions, environment)\n"
		"- startSegment / endSegment: the first and last segment id in the shot\n"
		"\n"
		f"Section title: {section.title}\n"
		f"Section text:\n{section.text}\n"
		"\n"
		"Remember:\n"
		f"- The first shot must start with segment {section.start_segment}\n"
		f"- The last shot must end with segment {section.end_segment}\n"
		"- There must be NO GAPS between shots\n"
	)
