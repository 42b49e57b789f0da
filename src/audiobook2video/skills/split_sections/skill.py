# -*- coding: utf-8 -*-
"""
split_sections/skill.py

这个文件做什么：
- 把"整章 -> sections"的完整流程封装成一个 skill：
  1) build prompt
  2) 调用 LLM 得到 sections 提案
  3) 校验形状
  4) 校验边界（连续、完整覆盖）
  5) 物化 Section
- 任何一步失败都直接 raise，不回退、不写部分结果。

注意：
- 只依赖一个 llm_client 接口：
  llm_client.chat_json(system_prompt: str, user_prompt: str) -> dict
- partition_into_sections 不碰网络，可以直接对已保存的提案重跑。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from audiobook2video.core.schemas import Segment, Transcript, check_segment_store, proposals_to_response

from .applier import materialize_sections
from .prompt import SYSTEM_PROMPT, build_user_prompt
from .schema import RESPONSE_KEY, Proposal, Section, SectionsConstraints
from .validator import validate_response_shape, validate_section_boundaries


@dataclass
class SplitSectionsResult:
	sections: List[Section]
	proposals: List[Proposal]
	response: Dict[str, Any]


def partition_into_sections(proposals: Sequence[Proposal], segments: Sequence[Segment]) -> List[Section]:
	validate_section_boundaries(proposals, segments)
	return materialize_sections(proposals, segments)


class SplitSectionsSkill:
	def __init__(self, llm_client: Any):
		self.llm_client = llm_client

	def propose(self, transcript: Transcript, c: SectionsConstraints) -> List[Proposal]:
		user_prompt = build_user_prompt(transcript, c)
		response = self.llm_client.chat_json(SYSTEM_PROMPT, user_prompt)
		return validate_response_shape(response)

	def run(self, transcript: Transcript, c: SectionsConstraints) -> SplitSectionsResult:
		check_segment_store(transcript.segments)

		proposals = self.propose(transcript, c)
		sections = partition_into_sections(proposals, transcript.segments)

		return SplitSectionsResult(
			sections=sections,
			proposals=proposals,
			response=proposals_to_response(RESPONSE_KEY, proposals),
		)
