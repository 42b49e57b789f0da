# -*- coding: utf-8 -*-
"""
core/schemas：流水线各阶段共享的数据契约（Segment / Section / Shot）。
"""

from .segment import Segment, Transcript, check_segment_store
from .proposal import Proposal, parse_proposals, proposals_to_response
from .section import Section, Sections
from .shot import Shot, Shots

__all__ = [
	"Segment",
	"Transcript",
	"check_segment_store",
	"Proposal",
	"parse_proposals",
	"proposals_to_response",
	"Section",
	"Sections",
	"Shot",
	"Shots",
]
