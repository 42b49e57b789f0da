# -*- coding: utf-8 -*-
"""
audiobook2video/stages/combine.py

目的：
- "合并阶段"：把所有 section{i}.shots.json 按 section 顺序合并成章节级 shots.json，
  shot_id 重新编号为 0..M-1。

输入：
- <director>/sections/sections.json（决定有哪些 section）
- <director>/sections/section{i}.shots.json（缺任何一个都报错；shot 范围必须正好覆盖对应 section）

输出：
- <director>/shots.json
- manifest.json：stage -> combined, durations.num_shots
"""

from __future__ import annotations

from audiobook2video.core.boundaries import check_sum_invariants, validate_contiguous_coverage
from audiobook2video.core.combine import combine_shots, load_section_shots, renumber_shots
from audiobook2video.core.io import ChapterPaths, list_section_shot_files, load_sections, load_shots, save_shots
from audiobook2video.core.manifest import load_or_new_manifest, save_manifest
from audiobook2video.core.timestamps import format_duration
from audiobook2video.stages.base import StageContext


class CombineStage:
	name = "combine"

	def run(self, paths: ChapterPaths, ctx: StageContext) -> None:
		paths.ensure_dirs()
		m = load_or_new_manifest(paths.manifest, ctx.book, ctx.chapter, ctx.director)

		try:
			sections = load_sections(paths.sections)
			cols = load_section_shots(paths, list(range(len(sections.sections))))
			for sec, col in zip(sections.sections, cols):
				validate_contiguous_coverage(col.shots, sec.start_segment, sec.end_segment, kind="shot")

			combined = combine_shots(cols)
			check_sum_invariants(combined.duration, combined.segment_count, combined.shots)
			if sections.sections:
				validate_contiguous_coverage(
					combined.shots,
					sections.sections[0].start_segment,
					sections.sections[-1].end_segment,
					kind="shot",
				)
		except Exception as e:
			m.mark_failed(self.name, str(e))
			save_manifest(paths.manifest, m)
			raise

		save_shots(paths.shots, combined)
		print(
			f"[OK] combined {len(cols)} sections: {combined.shot_count} shots, "
			f"{combined.segment_count} segments, {format_duration(combined.duration)} -> {paths.shots}"
		)

		m.durations["num_shots"] = combined.shot_count
		m.set_stage("combined")
		m.mark_done(self.name)
		save_manifest(paths.manifest, m)


def renumber_files(paths: ChapterPaths) -> int:
	"""
	把章节级 shots.json 与每个 section{i}.shots.json 的 shot_id 重置为 0..N-1。
	返回改写的文件数。
	"""
	targets = []
	if paths.shots.exists():
		targets.append(paths.shots)
	targets.extend(list_section_shot_files(paths.sections_dir))

	for p in targets:
		save_shots(p, renumber_shots(load_shots(p)))
		print(f"[OK] renumbered {p}")

	return len(targets)
