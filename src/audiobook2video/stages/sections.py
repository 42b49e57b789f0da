# -*- coding: utf-8 -*-
"""
audiobook2video/stages/sections.py

目的：
- "分段阶段"：把 transcript.json 切成 sections.json。
- LLM 给提案 -> 保存原始提案 -> 校验连续覆盖 -> 物化 -> 写 sections.json。

输入：
- <chapter>/transcript.json
- （--from_response 时）<director>/sections/sections.res.json

输出：
- <director>/sections/sections.res.json
- <director>/sections/sections.json
- manifest.json：stage -> sectioned

重跑：
- 新 sections 与旧 sections.json 不同时，旧的 section{i}.shots(.res).json 和章节级
  shots.json 一并删除，sections_index 清空；相同则保留（--from_response 重跑不受影响）。

失败：
- 校验不过直接 raise，sections.json 不写；manifest 记录 failed/last_error。
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Optional

from audiobook2video.core.io import (
	ChapterPaths,
	load_transcript,
	read_json,
	save_sections,
	write_json,
)
from audiobook2video.core.manifest import load_or_new_manifest, save_manifest
from audiobook2video.core.schemas import Sections, check_segment_store, parse_proposals, proposals_to_response
from audiobook2video.core.timestamps import format_duration
from audiobook2video.providers.llm.call_log import LoggedLLMClient
from audiobook2video.skills.split_sections.schema import RESPONSE_KEY, SectionsConstraints
from audiobook2video.skills.split_sections.skill import SplitSectionsSkill, partition_into_sections
from audiobook2video.stages.base import StageContext, describe_llm, llm_session


class SectionsStage:
	name = "sections"

	def __init__(self, llm_client: Optional[Any] = None):
		self.llm_client = llm_client

	def run(self, paths: ChapterPaths, ctx: StageContext) -> None:
		paths.ensure_dirs()
		m = load_or_new_manifest(paths.manifest, ctx.book, ctx.chapter, ctx.director)

		try:
			transcript = load_transcript(paths.transcript)
			check_segment_store(transcript.segments)
			print(f"[INFO] transcript: {len(transcript.segments)} segments, {format_duration(transcript.duration)}")

			if ctx.from_response:
				proposals = parse_proposals(read_json(paths.sections_response), RESPONSE_KEY)
				print(f"[INFO] reusing saved response: {paths.sections_response}")
				session = nullcontext(None)
			else:
				session = llm_session(self.llm_client)

			with session as llm:
				if llm is not None:
					skill = SplitSectionsSkill(LoggedLLMClient(llm, paths.llm_log, task="split_sections"))
					c = SectionsConstraints(target_sections=ctx.target_sections)
					proposals = skill.propose(transcript, c)
					write_json(paths.sections_response, proposals_to_response(RESPONSE_KEY, proposals))
					print(f"[OK] saved raw response: {paths.sections_response}")
					ctx.llm_provider_name, ctx.llm_model = describe_llm(llm)

			sections = partition_into_sections(proposals, transcript.segments)

		except Exception as e:
			m.mark_failed(self.name, str(e))
			save_manifest(paths.manifest, m)
			raise

		new_sections = Sections(duration=transcript.duration, section_count=len(sections), sections=sections)
		changed = not paths.sections.exists() or read_json(paths.sections) != new_sections.to_dict()

		save_sections(paths.sections, new_sections)
		print(f"[OK] {len(sections)} sections -> {paths.sections}")

		if changed:
			removed = clear_section_shots(paths)
			if removed:
				print(f"[WARN] sections changed: removed {removed} stale shot file(s); re-run the shots stage")
			m.sections_index = {}
			m.status["done"] = [k for k in m.status.get("done", []) if k not in ("shots", "combine")]

		m.durations["audio_s"] = transcript.duration
		m.durations["num_sections"] = len(sections)
		if ctx.llm_model:
			m.providers["llm"] = {"provider": ctx.llm_provider_name, "model": ctx.llm_model}
		m.set_stage("sectioned")
		m.mark_done(self.name)
		save_manifest(paths.manifest, m)


def clear_section_shots(paths: ChapterPaths) -> int:
	"""
	删除旧 sections 留下的 section{i}.shots(.res).json 与章节级 shots.json。
	返回删除的文件数。
	"""
	targets = list(paths.sections_dir.glob("section*.shots.json"))
	targets += list(paths.sections_dir.glob("section*.shots.res.json"))
	if paths.shots.exists():
		targets.append(paths.shots)

	for p in targets:
		p.unlink()
	return len(targets)
