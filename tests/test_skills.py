# -*- coding: utf-8 -*-
"""Skills 模块测试（假 LLM，无网络）。"""

from __future__ import annotations

import pytest

from audiobook2video.core.boundaries import check_sum_invariants, validate_contiguous_coverage
from audiobook2video.core.errors import BoundaryGapError, CoverageError, EmptySliceError
from audiobook2video.core.schemas import parse_proposals
from audiobook2video.skills.gen_shots.applier import materialize_shots
from audiobook2video.skills.gen_shots.prompt import build_user_prompt as build_shots_prompt
from audiobook2video.skills.gen_shots.schema import ShotsConstraints
from audiobook2video.skills.gen_shots.skill import GenShotsSkill, partition_section_into_shots
from audiobook2video.skills.split_sections.applier import materialize_sections
from audiobook2video.skills.split_sections.prompt import build_user_prompt as build_sections_prompt
from audiobook2video.skills.split_sections.schema import SectionsConstraints
from audiobook2video.skills.split_sections.skill import SplitSectionsSkill, partition_into_sections

from conftest import FakeLLM, make_segments, make_transcript, proposal


def _sections_response(*ranges):
	return {"sections": [proposal(a, b, f"Section {a}") for a, b in ranges]}


def _shots_response(*ranges):
	return {"shots": [proposal(a, b, f"Shot {a}") for a, b in ranges]}


def _section(first: int, last: int):
	"""segments 0..last 中，范围为 first..last 的那个 section。"""
	ranges = [(0, first - 1), (first, last)] if first > 0 else [(first, last)]
	props = parse_proposals(_sections_response(*ranges), "sections")
	return partition_into_sections(props, make_segments(last + 1))[-1]


class TestSplitSections:
	def test_run_materializes_sections(self, transcript12):
		llm = FakeLLM([_sections_response((0, 5), (6, 11))])
		res = SplitSectionsSkill(llm).run(transcript12, SectionsConstraints(target_sections=2))

		assert len(llm.calls) == 1
		a, b = res.sections
		assert (a.start_segment, a.end_segment, a.segment_count) == (0, 5, 6)
		assert (a.start, a.end) == (0.0, 11.5)
		assert a.duration == pytest.approx(11.5)
		assert [s.id for s in b.segments] == list(range(6, 12))
		assert (b.start, b.end) == (12.0, 23.5)
		assert res.response == _sections_response((0, 5), (6, 11))

	def test_union_of_ranges_is_full_input(self, transcript12):
		llm = FakeLLM([_sections_response((0, 2), (3, 3), (4, 9), (10, 11))])
		sections = SplitSectionsSkill(llm).run(transcript12, SectionsConstraints()).sections

		ids = [seg.id for sec in sections for seg in sec.segments]
		assert ids == [s.id for s in transcript12.segments]
		validate_contiguous_coverage(sections, 0, 11)

	def test_gap_example(self):
		segs = make_segments(10)
		props = parse_proposals(_sections_response((0, 4), (6, 9)), "sections")
		with pytest.raises(BoundaryGapError) as ei:
			partition_into_sections(props, segs)
		assert (ei.value.expected, ei.value.actual) == (5, 6)
		assert "Section 6" in str(ei.value)

	def test_coverage_shortfall_example(self):
		segs = make_segments(10)
		props = parse_proposals(_sections_response((0, 4), (5, 8)), "sections")
		with pytest.raises(CoverageError) as ei:
			partition_into_sections(props, segs)
		assert (ei.value.expected, ei.value.actual) == (9, 8)

	def test_reversed_range_is_empty_slice(self):
		segs = make_segments(10)
		props = parse_proposals(_sections_response((0, 4), (5, 3), (4, 9)), "sections")
		with pytest.raises(EmptySliceError):
			partition_into_sections(props, segs)

	def test_non_zero_base_id(self):
		segs = make_segments(6, first=100)
		props = parse_proposals(_sections_response((100, 102), (103, 105)), "sections")
		sections = partition_into_sections(props, segs)
		assert [s.id for s in sections[1].segments] == [103, 104, 105]

	def test_idempotent_materialization(self, transcript12):
		props = parse_proposals(_sections_response((0, 5), (6, 11)), "sections")
		a = partition_into_sections(props, transcript12.segments)
		b = partition_into_sections(props, transcript12.segments)
		assert [s.to_dict() for s in a] == [s.to_dict() for s in b]

	def test_invalid_segment_store_rejected_before_llm(self):
		t = make_transcript(3)
		t.segments.reverse()
		llm = FakeLLM([])
		with pytest.raises(ValueError):
			SplitSectionsSkill(llm).run(t, SectionsConstraints())
		assert llm.calls == []

	def test_materialize_direct(self):
		segs = make_segments(4)
		props = parse_proposals(_sections_response((0, 3)), "sections")
		(sec,) = materialize_sections(props, segs)
		assert sec.title == "Section 0" and sec.segment_count == 4

	def test_prompt_anchors(self):
		t = make_transcript(40, first=5)
		text = build_sections_prompt(t, SectionsConstraints(target_sections=4))
		assert "start with segment 5" in text
		assert "end with segment 44" in text
		assert "~10 segments" in text


class TestGenShots:
	def test_run(self):
		section = _section(10, 20)
		llm = FakeLLM([_shots_response((10, 13), (14, 17), (18, 20))])
		res = GenShotsSkill(llm).run(section, ShotsConstraints())

		shots = res.shots
		assert [s.shot_id for s in shots.shots] == [0, 1, 2]
		assert shots.shot_count == 3
		assert shots.segment_count == 11
		assert shots.shots[0].text == "s10 s11 s12 s13"
		assert (shots.shots[2].start, shots.shots[2].end) == (36.0, 41.5)
		check_sum_invariants(shots.duration, shots.segment_count, shots.shots)

	def test_prompt_carries_section_range(self):
		section = _section(10, 20)
		text = build_shots_prompt(section, ShotsConstraints())
		assert "from 10 to 20" in text
		assert "start with segment 10" in text
		assert "end with segment 20" in text
		assert section.title in text
		assert "s10 s11" in text

	def test_empty_slice_example(self):
		# 物化阶段自己的防线：不经过边界校验
		section = _section(10, 20)
		props = parse_proposals(_shots_response((25, 26)), "shots")
		with pytest.raises(EmptySliceError):
			materialize_shots(props, section)

	def test_out_of_range_rejected(self):
		section = _section(10, 20)
		props = parse_proposals(_shots_response((10, 20), (21, 26)), "shots")
		with pytest.raises(CoverageError) as ei:
			partition_section_into_shots(section, props)
		assert (ei.value.expected, ei.value.actual) == (20, 26)

	def test_first_shot_must_start_at_section_start(self):
		section = _section(10, 20)
		props = parse_proposals(_shots_response((0, 20)), "shots")
		with pytest.raises(BoundaryGapError) as ei:
			partition_section_into_shots(section, props)
		assert (ei.value.expected, ei.value.actual) == (10, 0)

	def test_bad_shape_raises(self):
		section = _section(0, 3)
		llm = FakeLLM([{"scenes": []}])
		with pytest.raises(ValueError, match="missing key: shots"):
			GenShotsSkill(llm).run(section, ShotsConstraints())
