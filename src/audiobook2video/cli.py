# -*- coding: utf-8 -*-
"""
audiobook2video/cli.py

目的：
- 提供项目的命令行入口。
- sections：整章 transcript -> sections.json
- shots：sections -> section{i}.shots.json（处理全部 section 时顺带 combine）
- combine：已有的 section shots -> 章节级 shots.json
- renumber：把已有 shots 文件的 shotId 重置为 0..N-1
- run：调用 pipeline/orchestrator.py 连续跑若干 stage（支持 --until）

注意：
- CLI 不做业务细节：只负责参数解析 + 把任务交给 stage/orchestrator。
- 路径统一为 <root>/audiobooks/<book>/<chapter>/<director>/...
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from audiobook2video.pipeline.orchestrator import STAGE_ORDER


def parse_ids(all_ids: List[int], text: Optional[str]) -> List[int]:
	"""
	解析 "1,3,5-10" 形式的 id 选择：
	- 逗号分隔；每部分可以是单个 id 或 a-b 范围
	- 开放范围："-5"（从 0 到 5）、"3-"（从 3 到最大 id）
	- 不在 all_ids 里的单个 id 跳过并提示；结果去重、升序
	"""
	if not text:
		return list(all_ids)

	valid = set(all_ids)
	out = set()

	for part in (p.strip() for p in text.split(",")):
		if not part:
			continue

		if "-" in part:
			lo_s, sep, hi_s = part.partition("-")
			if "-" in hi_s:
				raise ValueError(f"Invalid range syntax: {part}")
			try:
				lo = int(lo_s) if lo_s.strip() else 0
				hi = int(hi_s) if hi_s.strip() else max(all_ids, default=-1)
			except ValueError:
				raise ValueError(f"Invalid range syntax: {part}") from None
			out.update(i for i in range(lo, hi + 1) if i in valid)
			continue

		try:
			num = int(part)
		except ValueError:
			raise ValueError(f"Invalid ID: {part}") from None

		if num not in valid:
			print(f"[WARN] ID {num} not found in valid IDs, skipping")
			continue
		out.add(num)

	return sorted(out)


def _add_location_args(p: argparse.ArgumentParser, director_required: bool = True) -> None:
	p.add_argument("-b", "--book", required=True, help="Name of the book (directory under audiobooks/)")
	p.add_argument("-c", "--chapter", required=True, help="Chapter directory name, e.g. 0_Introduction")
	p.add_argument(
		"-d",
		"--director",
		required=director_required,
		default=None,
		help="Director run name, e.g. director-swift_falcon",
	)
	p.add_argument("--root", default=".", help="Directory that contains audiobooks/ (default: cwd)")


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="audiobook2video",
		description="Audiobook -> sections -> shots pipeline",
	)

	sub = p.add_subparsers(dest="cmd", required=True)

	secp = sub.add_parser("sections", help="Split chapter transcript into sections")
	_add_location_args(secp, director_required=False)
	secp.add_argument("-n", "--num_sections", type=int, default=10, help="Target number of sections")
	secp.add_argument("--from_response", action="store_true", help="Re-validate the saved sections.res.json")

	shotp = sub.add_parser("shots", help="Generate shots for sections")
	_add_location_args(shotp)
	shotp.add_argument("-s", "--sections", default=None, help="Section ids, e.g. '1,3,5-10' (default: all)")
	shotp.add_argument("--from_response", action="store_true", help="Re-validate saved section*.shots.res.json")

	combp = sub.add_parser("combine", help="Combine section shots into a single shots.json")
	_add_location_args(combp)

	renp = sub.add_parser("renumber", help="Reset shotId to 0..N-1 in existing shots files")
	_add_location_args(renp)

	runp = sub.add_parser("run", help="Run sections -> shots -> combine")
	_add_location_args(runp, director_required=False)
	runp.add_argument("-n", "--num_sections", type=int, default=10)
	runp.add_argument("--until", default="combine", choices=STAGE_ORDER)

	return p


def _resolve_director(director: Optional[str]) -> str:
	from audiobook2video.core.names import generate_memorable

	if director:
		return director

	name = generate_memorable("director-")
	print(f"[INFO] director = {name}")
	return name


def cmd_sections(book: str, chapter: str, director: Optional[str], num_sections: int, from_response: bool, root: str) -> str:
	from audiobook2video.core.io import chapter_paths
	from audiobook2video.stages.base import StageContext
	from audiobook2video.stages.sections import SectionsStage

	resolved = _resolve_director(director)
	ctx = StageContext(
		book=book,
		chapter=chapter,
		director=resolved,
		target_sections=num_sections,
		from_response=from_response,
	)
	SectionsStage().run(chapter_paths(book, chapter, resolved, root=root), ctx)
	return resolved


def cmd_shots(book: str, chapter: str, director: str, sections: Optional[str], from_response: bool, root: str) -> None:
	from audiobook2video.core.io import chapter_paths, load_sections
	from audiobook2video.stages.base import StageContext
	from audiobook2video.stages.combine import CombineStage
	from audiobook2video.stages.shots import ShotsStage

	paths = chapter_paths(book, chapter, director, root=root)
	all_ids = list(range(len(load_sections(paths.sections).sections)))
	selected = parse_ids(all_ids, sections)
	if not selected:
		raise ValueError("No sections were selected")

	ctx = StageContext(
		book=book,
		chapter=chapter,
		director=director,
		section_ids=selected,
		from_response=from_response,
	)
	ShotsStage().run(paths, ctx)

	# 处理了全部 section：顺带合并成章节级 shots.json
	if selected == all_ids:
		CombineStage().run(paths, ctx)


def cmd_combine(book: str, chapter: str, director: str, root: str) -> None:
	from audiobook2video.core.io import chapter_paths
	from audiobook2video.stages.base import StageContext
	from audiobook2video.stages.combine import CombineStage

	ctx = StageContext(book=book, chapter=chapter, director=director)
	CombineStage().run(chapter_paths(book, chapter, director, root=root), ctx)


def cmd_renumber(book: str, chapter: str, director: str, root: str) -> None:
	from audiobook2video.core.io import chapter_paths
	from audiobook2video.stages.combine import renumber_files

	n = renumber_files(chapter_paths(book, chapter, director, root=root))
	print(f"[OK] renumbered {n} file(s)")


def cmd_run(book: str, chapter: str, director: Optional[str], num_sections: int, until: str, root: str) -> None:
	from audiobook2video.pipeline.orchestrator import run_until
	from audiobook2video.stages.base import StageContext

	ctx = StageContext(
		book=book,
		chapter=chapter,
		director=_resolve_director(director),
		target_sections=num_sections,
	)
	run_until(ctx, until=until, root=root)


def main(argv=None) -> None:
	args = build_parser().parse_args(argv)

	try:
		if args.cmd == "sections":
			cmd_sections(args.book, args.chapter, args.director, args.num_sections, args.from_response, args.root)
			return

		if args.cmd == "shots":
			cmd_shots(args.book, args.chapter, args.director, args.sections, args.from_response, args.root)
			return

		if args.cmd == "combine":
			cmd_combine(args.book, args.chapter, args.director, args.root)
			return

		if args.cmd == "renumber":
			cmd_renumber(args.book, args.chapter, args.director, args.root)
			return

		if args.cmd == "run":
			cmd_run(args.book, args.chapter, args.director, args.num_sections, args.until, args.root)
			return

	except (ValueError, FileNotFoundError) as e:
		print(f"[ERR] {e}", file=sys.stderr)
		sys.exit(1)
