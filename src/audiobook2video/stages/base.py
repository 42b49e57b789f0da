# -*- coding: utf-8 -*-
"""
audiobook2video/stages/base.py

目的：
- 定义 Stage 的"接口形状"和运行上下文 StageContext。
- 让每个阶段都遵循同一种调用方式：run(paths, ctx)。
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Protocol

from audiobook2video.core.io import ChapterPaths


@dataclass
class StageContext:
	"""
	运行上下文：
	- book/chapter/director：定位章节与本次运行的目录
	- target_sections：split_sections 的目标数量（仅引导 LLM）
	- section_ids：shots 阶段只处理这些 section；None 表示全部
	- from_response：不调用 LLM，直接用已保存的 *.res.json 重新校验/物化
	- llm_provider_name/llm_model：记录生成时的模型信息（便于复现）
	"""
	book: str
	chapter: str
	director: str
	target_sections: int = 10
	section_ids: Optional[List[int]] = None
	from_response: bool = False
	llm_provider_name: str = ""
	llm_model: str = ""


class Stage(Protocol):
	name: str

	def run(self, paths: ChapterPaths, ctx: StageContext) -> None:
		...


@contextmanager
def llm_session(llm_client: Any = None) -> Iterator[Any]:
	"""
	传入了 client 就直接用（调用方负责关闭）；
	否则从 .env 加载一个，用完关闭。
	"""
	if llm_client is not None:
		yield llm_client
		return

	from audiobook2video.providers.llm.openai_compat_client import load_llm_client

	client = load_llm_client()
	try:
		yield client
	finally:
		client.close()


def describe_llm(llm_client: Any) -> tuple[str, str]:
	cfg = getattr(llm_client, "cfg", None)
	if cfg is None:
		return type(llm_client).__name__, ""
	return getattr(cfg, "provider", ""), getattr(cfg, "model", "")
