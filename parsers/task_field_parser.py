"""
Task field parser.

Fills the detail fields of one TaskSection from its lines:
- address from the first three lines
- company from the "in order of" line
- labelled details (references, dates, product, weight, ...)

Labels match at the start of the raw line, so indented lines never
start a field; they are continuation lines for Product and Remark.
"""

from datetime import datetime
from typing import Optional

import structlog

from models.shipment import TaskSection, Language, ParseWarning, WarningCode
from parsers.keywords import KeywordDictionary, DetailField
from utils.text_utils import extract_until_multiple_spaces, match_label

logger = structlog.get_logger(__name__)


ADDRESS_LINES = 3
DATE_FORMAT = "%d/%m/%Y %H:%M"
DATE_RANGE_SEPARATOR = " - "
PRODUCT_SEPARATOR = ", "
REMARK_SUFFIX = " -\n"

# Simple fields: first match wins
UPPER_CASE_FIELDS = {
    DetailField.CUSTOMER_REFERENCE: "customer_reference",
    DetailField.LOAD_REFERENCE: "load_reference",
    DetailField.UNLOAD_REFERENCE: "unload_reference",
    DetailField.TANK_STATUS: "tank_status",
}

RAW_FIELDS = {
    DetailField.WEIGHT: "weight",
    DetailField.VOLUME: "volume",
    DetailField.TEMPERATURE: "temperature",
    DetailField.DESTINATION: "destination_address",
}

SIMPLE_FIELDS = {**UPPER_CASE_FIELDS, **RAW_FIELDS}

DATE_FIELDS = {
    DetailField.LOAD_DATE: ("load_start_date", "load_end_date"),
    DetailField.UNLOAD_DATE: ("unload_start_date", "unload_end_date"),
}


def find_address(section: TaskSection, keywords: KeywordDictionary) -> str:
    """
    Address from the first three lines of a section.

    The task keyword is removed from the heading line. Addresses longer
    than three lines are truncated; shorter ones pick up the next lines.

    - ["LOAD   Chemie Werk GmbH", "Industriestrasse 5", "DE-68219 Mannheim"]
      → "Chemie Werk GmbH, Industriestrasse 5, DE-68219 Mannheim"
    """
    parts = []
    for i, line in enumerate(section.lines[:ADDRESS_LINES]):
        line = line.strip()
        if i == 0:
            heading_keywords = sorted(
                keywords.task_keywords.get(section.task_type, ()),
                key=len,
                reverse=True,
            )
            for keyword in heading_keywords:
                if line.startswith(keyword.upper()):
                    line = line[len(keyword):].strip()
                    break
        if line:
            parts.append(line)

    section.address = PRODUCT_SEPARATOR.join(parts)
    return section.address


def find_company(
    section: TaskSection,
    keywords: KeywordDictionary,
    language: Optional[Language] = None,
) -> Optional[str]:
    """Company the task is carried out for, from the "in order of" line."""
    labels = keywords.labels(DetailField.COMPANY, language)

    for line in section.lines:
        stripped = line.strip()
        lowered = stripped.lower()
        for label in labels:
            position = lowered.find(label)
            if position < 0:
                continue
            value = stripped[position + len(label):].strip()
            section.company = value.removeprefix(":").strip()
            return section.company

    return None


def parse_time_range(value: str) -> tuple[datetime, datetime]:
    """
    Parse "DD/MM/YYYY HH:MM - HH:MM" into start and end.

    The end shares the start's date; a range past midnight ends before
    it starts.

    - "03/11/2025 12:00 - 14:00" → (2025-11-03 12:00, 2025-11-03 14:00)

    Raises:
        ValueError: If the value is not a date range
    """
    parts = value.split(DATE_RANGE_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"expected '<date> <time> - <time>', got '{value}'")

    start = datetime.strptime(parts[0].strip(), DATE_FORMAT)
    end = datetime.strptime(parts[0].strip()[:11] + parts[1].strip(), DATE_FORMAT)
    return start, end


def get_task_details(
    section: TaskSection,
    keywords: KeywordDictionary,
    language: Optional[Language] = None,
    column_gap: int = 2,
    task_index: Optional[int] = None,
) -> list[ParseWarning]:
    """
    Fill the labelled detail fields of a section.

    Simple fields keep their first value. Product and Remark continue on
    following lines that start with a space; Product is upper-cased and
    comma-joined, Remark keeps its casing with " -" line endings.

    Malformed dates and compartments leave the field empty and produce a
    warning.

    Args:
        section: Section to fill
        keywords: Keyword dictionary
        language: Document language, tried first when matching labels
        column_gap: Whitespace run that ends a date value
        task_index: Position of the task, recorded on warnings

    Returns:
        Warnings for fields that could not be parsed
    """
    warnings: list[ParseWarning] = []

    labels = {detail: keywords.labels(detail, language) for detail in DetailField}

    product_parts: Optional[list[str]] = None
    in_product = False
    in_remark = False
    compartment_seen = False
    dates_seen = set()

    for line in section.lines:
        for detail, attribute in SIMPLE_FIELDS.items():
            if getattr(section, attribute):
                continue
            value = match_label(line, labels[detail])
            if value:
                if detail in UPPER_CASE_FIELDS:
                    value = value.upper()
                setattr(section, attribute, value)

        for detail, (start_attribute, end_attribute) in DATE_FIELDS.items():
            if detail in dates_seen:
                continue
            value = match_label(line, labels[detail])
            if value is None:
                continue
            dates_seen.add(detail)
            value = extract_until_multiple_spaces(value, column_gap)
            try:
                start, end = parse_time_range(value)
            except ValueError as e:
                logger.warning(
                    "date_range_invalid",
                    field=detail.value,
                    value=value,
                    shipment_id=section.shipment_id,
                    error=str(e),
                )
                warnings.append(ParseWarning(
                    code=WarningCode.DATE_RANGE_INVALID,
                    message=f"Could not read {detail.value} '{value}'",
                    field=start_attribute.removesuffix("_start_date") + "_date",
                    value=value,
                    task_index=task_index,
                ))
                continue
            setattr(section, start_attribute, start)
            setattr(section, end_attribute, end)

        if not compartment_seen:
            value = match_label(line, labels[DetailField.COMPARTMENT])
            if value is not None:
                compartment_seen = True
                try:
                    section.compartment = int(value)
                except ValueError:
                    logger.warning(
                        "compartment_invalid",
                        value=value,
                        task_type=section.task_type.value,
                        shipment_id=section.shipment_id,
                    )
                    warnings.append(ParseWarning(
                        code=WarningCode.COMPARTMENT_INVALID,
                        message=f"Compartment '{value}' is not a number",
                        field="compartment",
                        value=value,
                        task_index=task_index,
                    ))

        # Product: label line, then indented continuation lines
        value = match_label(line, labels[DetailField.PRODUCT])
        if value is not None:
            if product_parts is None:
                product_parts = [value] if value else []
                in_product = True
            else:
                in_product = False
        elif in_product:
            if line.startswith(" "):
                if line.strip():
                    product_parts.append(line.strip())
            else:
                in_product = False

        # Remark: same continuation, kept as written
        value = match_label(line, labels[DetailField.REMARK])
        if value is not None:
            if not section.remark:
                section.remark = value + REMARK_SUFFIX
                in_remark = True
            else:
                in_remark = False
        elif in_remark:
            if line.startswith(" "):
                section.remark += line.strip() + REMARK_SUFFIX
            else:
                in_remark = False

    if product_parts:
        section.product = PRODUCT_SEPARATOR.join(product_parts).upper()

    return warnings


def parse_task_details(
    section: TaskSection,
    keywords: KeywordDictionary,
    language: Optional[Language] = None,
    column_gap: int = 2,
    task_index: Optional[int] = None,
) -> list[ParseWarning]:
    """Run the address, company and detail passes over one section."""
    find_address(section, keywords)
    find_company(section, keywords, language)
    return get_task_details(
        section,
        keywords,
        language=language,
        column_gap=column_gap,
        task_index=task_index,
    )
