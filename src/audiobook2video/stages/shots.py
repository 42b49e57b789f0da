# -*- coding: utf-8 -*-
"""
audiobook2video/stages/shots.py

目的：
- "分镜阶段"：逐个 section 生成 shots，写 section{i}.shots.json。
- section 按 id 升序、一个一个处理（上一个 LLM 调用返回后才开始下一个）。

输入：
- <director>/sections/sections.json
- （--from_response 时）<director>/sections/section{i}.shots.res.json

输出：
- <director>/sections/section{i}.shots.res.json
- <director>/sections/section{i}.shots.json
- manifest.json：stage -> shots_done（sections_index 里每个 section 都是 done）或 shots_partial

失败：
- 某个 section 校验不过：该 section 的 shots.json 不写，之前已完成的 section 保留；
  manifest 记录失败后 raise。
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Dict, List, Optional

from audiobook2video.core.io import ChapterPaths, load_sections, read_json, save_shots, write_json
from audiobook2video.core.manifest import load_or_new_manifest, save_manifest
from audiobook2video.core.schemas import Sections, parse_proposals, proposals_to_response
from audiobook2video.core.timestamps import format_duration
from audiobook2video.providers.llm.call_log import LoggedLLMClient
from audiobook2video.skills.gen_shots.schema import RESPONSE_KEY, ShotsConstraints
from audiobook2video.skills.gen_shots.skill import GenShotsSkill, partition_section_into_shots
from audiobook2video.stages.base import StageContext, describe_llm, llm_session


def select_section_ids(sections: Sections, section_ids: Optional[List[int]]) -> List[int]:
	all_ids = list(range(len(sections.sections)))
	if section_ids is None:
		return all_ids

	for sid in section_ids:
		if sid not in all_ids:
			raise ValueError(f"Section {sid} not found")
	return sorted(set(section_ids))


def all_sections_done(sections_index: Dict[str, Any], section_count: int) -> bool:
	"""以 manifest 为准：sections 阶段重跑会清空 sections_index。"""
	return all(
		sections_index.get(str(sid), {}).get("status") == "done"
		for sid in range(section_count)
	)


class ShotsStage:
	name = "shots"

	def __init__(self, llm_client: Optional[Any] = None):
		self.llm_client = llm_client

	def run(self, paths: ChapterPaths, ctx: StageContext) -> None:
		paths.ensure_dirs()
		m = load_or_new_manifest(paths.manifest, ctx.book, ctx.chapter, ctx.director)

		try:
			sections = load_sections(paths.sections)
			ids = select_section_ids(sections, ctx.section_ids)
		except Exception as e:
			m.mark_failed(self.name, str(e))
			save_manifest(paths.manifest, m)
			raise

		session = nullcontext(None) if ctx.from_response else llm_session(self.llm_client)
		c = ShotsConstraints()

		with session as llm:
			skill = None
			if llm is not None:
				skill = GenShotsSkill(LoggedLLMClient(llm, paths.llm_log, task="gen_shots"))
				ctx.llm_provider_name, ctx.llm_model = describe_llm(llm)
				m.providers["llm"] = {"provider": ctx.llm_provider_name, "model": ctx.llm_model}

			for sid in ids:
				section = sections.sections[sid]
				print(f"[RUN] section {sid}: {section.title} (segments {section.start_segment}-{section.end_segment})")

				try:
					res_path = paths.section_shots_response(sid)
					if skill is None:
						proposals = parse_proposals(read_json(res_path), RESPONSE_KEY)
					else:
						proposals = skill.propose(section, c)
						write_json(res_path, proposals_to_response(RESPONSE_KEY, proposals))

					shots = partition_section_into_shots(section, proposals)

				except Exception as e:
					m.set_section(sid, status="failed", error=str(e))
					m.mark_failed(self.name, f"section {sid}: {e}")
					m.set_stage("shots_partial")
					save_manifest(paths.manifest, m)
					raise

				out = paths.section_shots(sid)
				save_shots(out, shots)
				print(f"[OK] section {sid}: {shots.shot_count} shots, {format_duration(shots.duration)} -> {out}")

				m.set_section(sid, status="done", shot_count=shots.shot_count, duration=shots.duration, error="")
				save_manifest(paths.manifest, m)

		if all_sections_done(m.sections_index, len(sections.sections)):
			m.set_stage("shots_done")
			m.mark_done(self.name)
		else:
			m.set_stage("shots_partial")
		save_manifest(paths.manifest, m)
