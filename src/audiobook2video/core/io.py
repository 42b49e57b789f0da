# -*- coding: utf-8 -*-
"""
audiobook2video/core/io.py

目的：
- 统一管理章节目录的路径约定（哪些文件放哪里）。
- 提供 JSON 读写与各类产物的 load/save。

目录约定（v0.1）：
- <root>/audiobooks/<book>/<chapter>/transcript.json      : 转写结果（外部输入）
- <chapter>/<director>/manifest.json                      : 状态与断点续跑信息
- <chapter>/<director>/sections/sections.res.json         : LLM 原始 section 提案
- <chapter>/<director>/sections/sections.json             : 校验后的 sections
- <chapter>/<director>/sections/section{i}.shots.res.json : LLM 原始 shot 提案
- <chapter>/<director>/sections/section{i}.shots.json     : 校验后的单 section shots
- <chapter>/<director>/shots.json                         : 章节级合并 shots
- <chapter>/<director>/logs/llm.jsonl                     : LLM 调用日志

注意：
- core 的分段/分镜函数不碰路径，只有 stage 通过这里读写文件。
- 写文件先写临时文件再 os.replace，失败不会留下半截文件。
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from audiobook2video.core.schemas import Sections, Shots, Transcript


@dataclass(frozen=True)
class ChapterPaths:
	"""
	只存路径，不做读写。
	ensure_dirs() 负责创建 director 下的目录骨架。
	"""
	chapter_dir: Path
	director_dir: Path
	transcript: Path
	manifest: Path
	sections_dir: Path
	sections: Path
	sections_response: Path
	shots: Path
	logs_dir: Path

	@property
	def llm_log(self) -> Path:
		return self.logs_dir / "llm.jsonl"

	def section_shots(self, section_id: int) -> Path:
		return self.sections_dir / f"section{section_id}.shots.json"

	def section_shots_response(self, section_id: int) -> Path:
		return self.sections_dir / f"section{section_id}.shots.res.json"

	def ensure_dirs(self) -> None:
		"""重复执行必须安全（exist_ok=True）。"""
		for d in (self.director_dir, self.sections_dir, self.logs_dir):
			d.mkdir(parents=True, exist_ok=True)


def chapter_paths(book: str, chapter: str, director: str, root: str | Path = ".") -> ChapterPaths:
	"""
	根据 book/chapter/director 生成 ChapterPaths（不创建目录）。
	"""
	chapter_dir = Path(root) / "audiobooks" / book / chapter
	director_dir = chapter_dir / director
	sections_dir = director_dir / "sections"

	return ChapterPaths(
		chapter_dir=chapter_dir,
		director_dir=director_dir,
		transcript=chapter_dir / "transcript.json",
		manifest=director_dir / "manifest.json",
		sections_dir=sections_dir,
		sections=sections_dir / "sections.json",
		sections_response=sections_dir / "sections.res.json",
		shots=director_dir / "shots.json",
		logs_dir=director_dir / "logs",
	)


def read_json(path: Path) -> Any:
	return json.loads(Path(path).read_text(encoding="utf-8"))


def write_json(path: Path, data: Any) -> None:
	"""整文件覆盖写：同目录临时文件 + os.replace。"""
	path = Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)

	fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
	try:
		with os.fdopen(fd, "w", encoding="utf-8") as f:
			f.write(json.dumps(data, ensure_ascii=False, indent=2))
		os.replace(tmp, path)
	except BaseException:
		if os.path.exists(tmp):
			os.unlink(tmp)
		raise


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
	path = Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)
	with path.open("a", encoding="utf-8") as f:
		f.write(json.dumps(record, ensure_ascii=False) + "\n")


def load_transcript(path: Path) -> Transcript:
	if not Path(path).exists():
		raise FileNotFoundError(f"Transcript not found at: {path}")
	return Transcript.from_dict(read_json(path))


def load_sections(path: Path) -> Sections:
	if not Path(path).exists():
		raise FileNotFoundError(f"Sections file not found: {path}")
	return Sections.from_dict(read_json(path))


def save_sections(path: Path, sections: Sections) -> None:
	write_json(path, sections.to_dict())


def load_shots(path: Path) -> Shots:
	return Shots.from_dict(read_json(path))


def save_shots(path: Path, shots: Shots) -> None:
	write_json(path, shots.to_dict())


def list_section_shot_files(sections_dir: Path) -> List[Path]:
	"""已生成的 section{i}.shots.json，按 section id 升序。"""
	out = []
	for p in Path(sections_dir).glob("section*.shots.json"):
		num = p.name[len("section"):-len(".shots.json")]
		if num.isdigit():
			out.append((int(num), p))
	return [p for _, p in sorted(out)]
