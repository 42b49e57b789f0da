# -*- coding: utf-8 -*-
"""
audiobook2video/core/manifest.py

目的：
- 定义 manifest.json 的数据结构与读写方法（每个 director 目录一份）。
- 记录流水线状态：每个 stage 跑完更新一次，失败记录 last_error。
- 支持断点续跑：sections / shots / combine 都可以单独重跑。

manifest 的核心字段：
- status.stage      : 当前阶段（empty/sectioned/shots_partial/shots_done/combined）
- status.done       : 已完成阶段
- status.failed     : 失败阶段
- status.last_error : 最近一次错误信息
- sections_index    : 每个 section 的 shot 生成情况
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from audiobook2video.core.io import write_json


SCHEMA_VERSION = "audiobook2video.manifest.v0.1"

STAGES = [
	"empty",
	"sectioned",
	"shots_partial",
	"shots_done",
	"combined",
]


@dataclass
class Manifest:
	schema_version: str
	meta: Dict[str, Any]
	status: Dict[str, Any]
	durations: Dict[str, Any]
	providers: Dict[str, Any]
	artifacts: Dict[str, Any]
	sections_index: Dict[str, Any]

	@property
	def stage(self) -> str:
		return self.status.get("stage", "empty")

	def set_stage(self, stage: str) -> None:
		if stage not in STAGES:
			raise ValueError(f"invalid stage: {stage}")

		self.status["stage"] = stage

	def mark_done(self, key: str) -> None:
		done = self.status.setdefault("done", [])
		if key not in done:
			done.append(key)

		failed = self.status.setdefault("failed", [])
		if key in failed:
			failed.remove(key)

	def mark_failed(self, key: str, err: str) -> None:
		failed = self.status.setdefault("failed", [])
		if key not in failed:
			failed.append(key)

		self.status["last_error"] = err

	def set_section(self, section_id: int, **info: Any) -> None:
		entry = self.sections_index.setdefault(str(section_id), {})
		entry.update(info)


def new_manifest(book: str, chapter: str, director: str) -> Manifest:
	return Manifest(
		schema_version=SCHEMA_VERSION,
		meta={
			"project_id": "audiobook2video",
			"book": book,
			"chapter": chapter,
			"director": director,
		},
		status={
			"stage": "empty",
			"done": [],
			"failed": [],
			"last_error": "",
		},
		durations={
			"audio_s": 0.0,
			"num_sections": 0,
			"num_shots": 0,
		},
		providers={
			"llm": {},
		},
		artifacts={
			"sections": "sections/sections.json",
			"shots": "shots.json",
		},
		sections_index={},
	)


def load_manifest(path: Path) -> Manifest:
	"""
	缺字段就用空 dict，避免旧 manifest 直接崩。
	"""
	data = json.loads(Path(path).read_text(encoding="utf-8"))

	return Manifest(
		schema_version=data.get("schema_version", ""),
		meta=data.get("meta", {}),
		status=data.get("status", {}),
		durations=data.get("durations", {}),
		providers=data.get("providers", {}),
		artifacts=data.get("artifacts", {}),
		sections_index=data.get("sections_index", {}),
	)


def load_or_new_manifest(path: Path, book: str, chapter: str, director: str) -> Manifest:
	if Path(path).exists():
		return load_manifest(path)
	return new_manifest(book, chapter, director)


def save_manifest(path: Path, m: Manifest) -> None:
	data = {
		"schema_version": m.schema_version,
		"meta": m.meta,
		"status": m.status,
		"durations": m.durations,
		"providers": m.providers,
		"artifacts": m.artifacts,
		"sections_index": m.sections_index,
	}

	write_json(path, data)
