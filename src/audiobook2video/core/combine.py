# -*- coding: utf-8 -*-
"""
audiobook2video/core/combine.py

这个文件做什么：
- 把各个 section 的 shots 合并成章节级 shots，并重新编号 shot_id。
- combine_shots / renumber_shots 是纯函数；load_section_shots 负责按 section 顺序读文件。

编号规则：
- 按 section 顺序、section 内按原顺序，shot_id = offset + 局部下标
- 合并后 shot_id 恰好是 0..shot_count-1
- duration / segment_count 为各输入集合之和
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence

from audiobook2video.core.errors import MissingInputError
from audiobook2video.core.io import ChapterPaths, load_shots
from audiobook2video.core.schemas import Shot, Shots


def combine_shots(collections: Iterable[Shots]) -> Shots:
	all_shots: List[Shot] = []
	shot_id_offset = 0
	total_duration = 0.0
	total_segment_count = 0

	for col in collections:
		for i, shot in enumerate(col.shots):
			all_shots.append(replace(shot, shot_id=shot_id_offset + i))

		shot_id_offset += len(col.shots)
		total_duration += col.duration
		total_segment_count += col.segment_count

	return Shots(
		duration=total_duration,
		segment_count=total_segment_count,
		shot_count=len(all_shots),
		shots=all_shots,
	)


def renumber_shots(col: Shots) -> Shots:
	"""把已有集合的 shot_id 重置为 0..N-1（其余字段不变）。"""
	shots = [replace(s, shot_id=i) for i, s in enumerate(col.shots)]
	return replace(col, shot_count=len(shots), shots=shots)


def load_section_shots(paths: ChapterPaths, section_ids: Sequence[int]) -> List[Shots]:
	"""
	按给定顺序读取 section{i}.shots.json。
	任何一个缺失都直接报错，不做部分合并。
	"""
	out = []
	for sid in section_ids:
		p = paths.section_shots(sid)
		if not p.exists():
			raise MissingInputError(sid, p)
		out.append(load_shots(p))
	return out
