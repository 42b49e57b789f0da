# -*- coding: utf-8 -*-
"""
scripts/debug_gen_shots.py

这个脚本做什么：
- 读取某个 director 目录下的 sections.json，取其中一个 section
- 调用 gen_shots skill（通过 .env 配置的 LLM），或用 --response 指定已保存的提案
- 只打印，不写任何文件：
  1) 提案的 shot 数
  2) 校验是否通过；失败则输出错误原因
  3) 预览前 N 个 shot（便于肉眼检查切分质量）

使用方式：
1) 在项目根目录创建 .env（并确保 .gitignore 忽略它）：
   LLM_API_KEY=xxx
   LLM_MODEL=o3-mini
2) 运行：
   python scripts/debug_gen_shots.py --sections_json audiobooks/<book>/<chapter>/<director>/sections/sections.json --section 0
"""

from __future__ import annotations

import argparse
import sys

from audiobook2video.core.errors import PartitionError
from audiobook2video.core.io import load_sections, read_json
from audiobook2video.core.schemas import parse_proposals
from audiobook2video.core.timestamps import format_duration
from audiobook2video.skills.gen_shots.schema import RESPONSE_KEY, ShotsConstraints
from audiobook2video.skills.gen_shots.skill import GenShotsSkill, partition_section_into_shots


def build_argparser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser()
	p.add_argument("--sections_json", required=True, help="sections.json 路径")
	p.add_argument("--section", type=int, default=0, help="section 下标")
	p.add_argument("--response", default=None, help="已保存的 section{i}.shots.res.json；缺省则调用 LLM")
	p.add_argument("--segments_per_shot", type=int, default=4)
	p.add_argument("--preview", type=int, default=8, help="预览前 N 个 shot")
	return p


def main() -> int:
	args = build_argparser().parse_args()

	sections = load_sections(args.sections_json)
	if not 0 <= args.section < len(sections.sections):
		print(f"[ERR] Section {args.section} not found")
		return 1
	section = sections.sections[args.section]
	print(f"[section] {args.section}: {section.title} segments={section.start_segment}-{section.end_segment}")

	if args.response:
		proposals = parse_proposals(read_json(args.response), RESPONSE_KEY)
	else:
		from audiobook2video.providers.llm.openai_compat_client import load_llm_client

		llm = load_llm_client()
		try:
			proposals = GenShotsSkill(llm).propose(section, ShotsConstraints(segments_per_shot=args.segments_per_shot))
		finally:
			llm.close()

	print(f"[proposal] shots={len(proposals)}")

	try:
		shots = partition_section_into_shots(section, proposals)
	except PartitionError as e:
		print(f"[invalid] {e}")
		return 2

	print(f"[valid] shots={shots.shot_count} segments={shots.segment_count} duration={format_duration(shots.duration)}")
	print(f"\n--- preview shots (first {args.preview}) ---")
	for s in shots.shots[: args.preview]:
		snip = s.text
		if len(snip) > 160:
			snip = snip[:160] + "..."
		print(f"{s.shot_id:03d} [{s.start_segment}-{s.end_segment}] {s.title}: {snip}")

	return 0


if __name__ == "__main__":
	sys.exit(main())
