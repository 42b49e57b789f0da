# -*- coding: utf-8 -*-
"""
audiobook2video/pipeline/orchestrator.py

目的：
- 作为"阶段调度器"：按固定顺序执行 sections -> shots -> combine。
- 支持 `run_until(..., until="shots")`：跑到指定阶段停止。

注意：
- orchestrator 不关心具体业务（如何分段、如何调用模型）。
- 只负责：创建 paths、按顺序调用 stage、打印状态。
- 传入 llm_client 时所有 stage 共用它；否则各 stage 自己从 .env 加载并关闭。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from audiobook2video.core.io import chapter_paths
from audiobook2video.core.manifest import load_manifest
from audiobook2video.stages.base import StageContext
from audiobook2video.stages.combine import CombineStage
from audiobook2video.stages.sections import SectionsStage
from audiobook2video.stages.shots import ShotsStage


STAGE_ORDER = [
	"sections",
	"shots",
	"combine",
]


def run_until(
	ctx: StageContext,
	until: str = "combine",
	root: str | Path = ".",
	llm_client: Optional[Any] = None,
	start: str = "sections",
) -> None:
	if until not in STAGE_ORDER:
		raise ValueError(f"unknown stage: {until}")
	if start not in STAGE_ORDER:
		raise ValueError(f"unknown stage: {start}")

	paths = chapter_paths(ctx.book, ctx.chapter, ctx.director, root=root)
	paths.ensure_dirs()

	stages = {
		"sections": SectionsStage(llm_client=llm_client),
		"shots": ShotsStage(llm_client=llm_client),
		"combine": CombineStage(),
	}

	names = STAGE_ORDER[STAGE_ORDER.index(start):STAGE_ORDER.index(until) + 1]
	for name in names:
		print(f"[RUN] stage={name}")
		stages[name].run(paths, ctx)

	if paths.manifest.exists():
		m = load_manifest(paths.manifest)
		print(f"[OK] current stage = {m.stage}")
