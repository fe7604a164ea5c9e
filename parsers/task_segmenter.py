"""
Task segmenter.

Splits the text below the document header into ordered TaskSections.
A task starts at a line beginning with an upper-case task keyword
("LOAD", "ENTLADEN", "PRISE EN CHARGE"); every following line belongs to
that task until the next heading. Instruction marker lines repeated on
later pages are skipped.
"""

from typing import Optional

import structlog

from models.shipment import TaskSection, TaskType
from parsers.header_parser import find_instruction_lines
from parsers.keywords import KeywordDictionary

logger = structlog.get_logger(__name__)


# Sections shorter than this are heading fragments, not tasks
MIN_SECTION_LINES = 2


def identify_task_type(line: str, keywords: KeywordDictionary) -> Optional[TaskType]:
    """
    Task type of a heading line.

    Case-sensitive against the upper-cased keyword, so "Load date: ..."
    is not a heading. Task types are checked in dictionary order
    (unload before load).
    """
    normalized = line.strip()
    for task_type, task_keywords in keywords.task_keywords.items():
        for keyword in task_keywords:
            if normalized.startswith(keyword.upper()):
                return task_type
    return None


def extract_task_sections(text: str, keywords: KeywordDictionary) -> list[TaskSection]:
    """
    Partition text into task sections in document order.

    Blank lines and instruction marker lines are skipped. Lines above the
    first heading belong to no section and are dropped.

    Args:
        text: Remainder after the header
        keywords: Keyword dictionary

    Returns:
        All sections, including ones later discarded by is_retained_section
    """
    lines = text.splitlines()
    instruction_lines = find_instruction_lines(lines, keywords)

    sections: list[TaskSection] = []
    current: Optional[TaskSection] = None
    dropped = 0

    for i, line in enumerate(lines):
        if not line.strip() or i in instruction_lines:
            continue

        task_type = identify_task_type(line, keywords)
        if task_type is not None:
            current = TaskSection(task_type=task_type, lines=[line])
            sections.append(current)
            continue

        if current is None:
            dropped += 1
            continue

        current.lines.append(line)

    if dropped:
        logger.debug("lines_before_first_task_dropped", count=dropped)

    logger.debug("task_sections_extracted", count=len(sections))
    return sections


def is_retained_section(section: TaskSection) -> bool:
    """
    Whether a section is a real task.

    Discards sections with fewer than two lines and sections whose
    heading line is indented (a continuation caught by a keyword).
    """
    if len(section.lines) < MIN_SECTION_LINES:
        return False
    return not section.lines[0].startswith(" ")
