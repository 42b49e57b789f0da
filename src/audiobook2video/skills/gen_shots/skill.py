# -*- coding: utf-8 -*-
"""
gen_shots/skill.py

这个文件做什么：
- 把"单个 section -> shots"的完整流程封装成一个 skill：
  1) build prompt
  2) 调用 LLM 得到 shots 提案
  3) 校验形状
  4) 校验边界（从 section.startSegment 到 section.endSegment 连续覆盖）
  5) 物化 Shot，汇总 duration / segmentCount
- 任何一步失败都直接 raise，这个 section 的 shots 不落盘。

注意：
- 只依赖一个 llm_client 接口：
  llm_client.chat_json(system_prompt: str, user_prompt: str) -> dict
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from audiobook2video.core.schemas import proposals_to_response

from .applier import build_shots, materialize_shots
from .prompt import SYSTEM_PROMPT, build_user_prompt
from .schema import RESPONSE_KEY, Proposal, Section, Shots, ShotsConstraints
from .validator import validate_response_shape, validate_shot_boundaries


@dataclass
class GenShotsResult:
	shots: Shots
	proposals: List[Proposal]
	response: Dict[str, Any]


def partition_section_into_shots(section: Section, proposals: Sequence[Proposal]) -> Shots:
	validate_shot_boundaries(proposals, section)
	return build_shots(materialize_shots(proposals, section))


class GenShotsSkill:
	def __init__(self, llm_client: Any):
		self.llm_client = llm_client

	def propose(self, section: Section, c: ShotsConstraints) -> List[Proposal]:
		user_prompt = build_user_prompt(section, c)
		response = self.llm_client.chat_json(SYSTEM_PROMPT, user_prompt)
		return validate_response_shape(response)

	def run(self, section: Section, c: ShotsConstraints) -> GenShotsResult:
		proposals = self.propose(section, c)
		shots = partition_section_into_shots(section, proposals)

		return GenShotsResult(
			shots=shots,
			proposals=proposals,
			response=proposals_to_response(RESPONSE_KEY, proposals),
		)
