"""
Unit tests for the task segmenter.

Run: pytest tests/unit/test_task_segmenter.py -v
"""

from models.shipment import TaskType
from parsers.keywords import build_keyword_dictionary
from parsers.task_segmenter import (
    identify_task_type,
    extract_task_sections,
    is_retained_section,
)
from tests.factories import TaskSectionFactory


class TestIdentifyTaskType:
    """Tests for identify_task_type()"""

    def test_english_headings(self, keywords):
        assert identify_task_type("LOAD   Depot", keywords) == TaskType.LOAD
        assert identify_task_type("UNLOAD   Depot", keywords) == TaskType.UNLOAD
        assert identify_task_type("COLLECT   Depot", keywords) == TaskType.COLLECT
        assert identify_task_type("DROP OFF   Depot", keywords) == TaskType.DROPOFF
        assert identify_task_type("CLEANING   Wash BV", keywords) == TaskType.CLEANING

    def test_german_headings(self, keywords):
        assert identify_task_type("ENTLADEN   BASF SE", keywords) == TaskType.UNLOAD
        assert identify_task_type("LADEN   Werk", keywords) == TaskType.LOAD
        assert identify_task_type("ABSATTELN   Hof", keywords) == TaskType.DROPOFF
        assert identify_task_type("REINIGEN   Station", keywords) == TaskType.CLEANING

    def test_french_headings(self, keywords):
        assert identify_task_type("PRISE EN CHARGE   Total", keywords) == TaskType.LOAD
        assert identify_task_type("DÉCHARGEMENT   Depot", keywords) == TaskType.UNLOAD
        assert identify_task_type("NETTOYAGE   Station", keywords) == TaskType.CLEANING

    def test_polish_headings(self, keywords):
        assert identify_task_type("ZAŁADUNEK   Zakład", keywords) == TaskType.LOAD
        assert identify_task_type("ROZŁADUNEK   Magazyn", keywords) == TaskType.UNLOAD

    def test_mixed_case_label_is_not_a_heading(self, keywords):
        """"Load date:" must not start a task."""
        assert identify_task_type("Load date: 03/11/2025 12:00 - 14:00", keywords) is None

    def test_leading_whitespace_ignored(self, keywords):
        assert identify_task_type("   UNLOAD   Depot", keywords) == TaskType.UNLOAD

    def test_no_match(self, keywords):
        assert identify_task_type("Industriestrasse 5", keywords) is None

    def test_custom_dictionary(self):
        keywords = build_keyword_dictionary(task_keywords={TaskType.COLLECT: ("pickup",)})

        assert identify_task_type("PICKUP   Depot", keywords) == TaskType.COLLECT
        assert identify_task_type("LOAD   Depot", keywords) is None


class TestExtractTaskSections:
    """Tests for extract_task_sections()"""

    def test_sections_in_document_order(self, keywords):
        text = (
            "LOAD   A\n"
            "Street 1\n"
            "UNLOAD   B\n"
            "Street 2\n"
            "CLEANING   C\n"
            "Street 3\n"
        )

        sections = extract_task_sections(text, keywords)

        assert [s.task_type for s in sections] == [TaskType.LOAD, TaskType.UNLOAD, TaskType.CLEANING]
        assert sections[0].lines == ["LOAD   A", "Street 1"]
        assert sections[2].lines == ["CLEANING   C", "Street 3"]

    def test_lines_kept_verbatim(self, keywords):
        text = "LOAD   A\nProduct: acid\n  98% concentration\n"

        sections = extract_task_sections(text, keywords)

        assert sections[0].lines[2] == "  98% concentration"
        assert sections[0].content == "LOAD   A\nProduct: acid\n  98% concentration"

    def test_blank_lines_skipped(self, keywords):
        text = "LOAD   A\n\n   \nStreet 1\n"

        sections = extract_task_sections(text, keywords)

        assert sections[0].lines == ["LOAD   A", "Street 1"]

    def test_instruction_lines_skipped(self, keywords):
        """A page header repeated mid-document is not a task."""
        text = "LOAD   A\nStreet 1\nLOAD INSTRUCTION\nCity\n"

        sections = extract_task_sections(text, keywords)

        assert len(sections) == 1
        assert sections[0].lines == ["LOAD   A", "Street 1", "City"]

    def test_french_split_instruction_skipped(self, keywords):
        text = "PRISE EN CHARGE   A\nRue 1\nINSTRUCTIONS DE\nCHARGEMENT\nLyon\n"

        sections = extract_task_sections(text, keywords)

        assert len(sections) == 1
        assert sections[0].lines == ["PRISE EN CHARGE   A", "Rue 1", "Lyon"]

    def test_remark_mentioning_instruction_kept(self, keywords):
        text = "LOAD   A\nStreet 1\nRemark: Driver must read the loading instruction at gate\n  Gate 4\n"

        sections = extract_task_sections(text, keywords)

        assert sections[0].lines == [
            "LOAD   A",
            "Street 1",
            "Remark: Driver must read the loading instruction at gate",
            "  Gate 4",
        ]

    def test_lines_before_first_task_dropped(self, keywords):
        text = "Some preamble\nLOAD   A\nStreet 1\n"

        sections = extract_task_sections(text, keywords)

        assert len(sections) == 1
        assert sections[0].lines[0] == "LOAD   A"

    def test_single_line_section_produced(self, keywords):
        """Segmenter keeps it; is_retained_section filters it."""
        sections = extract_task_sections("LOAD   A\nUNLOAD   B\nStreet\n", keywords)

        assert len(sections) == 2
        assert sections[0].lines == ["LOAD   A"]

    def test_empty_text(self, keywords):
        assert extract_task_sections("", keywords) == []

    def test_sections_default_to_unparsed(self, keywords):
        sections = extract_task_sections("LOAD   A\nStreet 1\n", keywords)

        assert sections[0].address == ""
        assert sections[0].start is None
        assert sections[0].end is None


class TestIsRetainedSection:
    """Tests for is_retained_section()"""

    def test_two_lines_retained(self):
        section = TaskSectionFactory.create(lines=["LOAD   A", "Street 1"])

        assert is_retained_section(section) is True

    def test_single_line_discarded(self):
        section = TaskSectionFactory.create(lines=["LOAD   A"])

        assert is_retained_section(section) is False

    def test_indented_heading_discarded(self):
        section = TaskSectionFactory.create(lines=["  LOAD   A", "Street 1"])

        assert is_retained_section(section) is False
