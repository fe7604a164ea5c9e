"""
Header parser for shipment instruction documents.

Reads the preamble above the first task heading:
1. Instruction type + document language from the first lines
2. Shipment id from the "Shipment" line
3. Shipment-level details (truck, driver, chassis, container, tank details,
   general remark) from a scan of the full text

Each step records a ParseWarning on the shipment instead of failing.
"""

import re
from dataclasses import dataclass
from typing import Optional

import structlog

from models.shipment import Shipment, Language, InstructionType, WarningCode
from parsers.keywords import KeywordDictionary, DetailField
from utils.text_utils import extract_until_multiple_spaces, match_label

logger = structlog.get_logger(__name__)


# Number right before "kg" on a tare weight line
KG_PATTERN = re.compile(r"(\d[\d.,]*)\s*kg")

# Header lines scanned for the instruction marker
INSTRUCTION_SCAN_LINES = 2


@dataclass(frozen=True)
class InstructionMatch:
    """
    Instruction marker found on a line.

    `description` is None when the marker stands alone on its line and the
    description keyword is expected on the next one (French layout).
    """
    language: Language
    marker: str
    description: Optional[str] = None

    @property
    def awaiting_description(self) -> bool:
        return self.description is None

    def label(self, keywords: KeywordDictionary) -> str:
        """Compose the instruction label, e.g. "UNLOAD INSTRUCTION"."""
        marker = self.marker.upper()
        description = (self.description or "").upper()
        if self.language in keywords.marker_first_languages:
            return f"{marker} {description}".strip()
        return f"{description} {marker}".strip()


def _find_description(
    line: str,
    language: Language,
    keywords: KeywordDictionary,
) -> Optional[str]:
    """First description keyword of a language found in the line."""
    for description in keywords.instruction_descriptions.get(language, ()):
        if description.upper() not in line:
            continue
        # "ENTLADE" must not count as "LADE"
        excluding = keywords.description_exclusions.get(description)
        if excluding and excluding.upper() in line:
            continue
        return description
    return None


def detect_instruction(
    line: str,
    keywords: KeywordDictionary,
    pending: Optional[InstructionMatch] = None,
) -> Optional[InstructionMatch]:
    """
    Detect an instruction marker line.

    Markers are checked in priority order (French, German, English) and
    only match upper-case text, so "loading instruction" inside a remark
    is ordinary content. With `pending` set, a line without a marker may
    still complete the pending French marker with its description keyword.

    Args:
        line: Document line
        keywords: Keyword dictionary
        pending: Marker from the previous line that awaits its description

    Returns:
        InstructionMatch, or None if the line is not an instruction line
    """
    language = None
    marker = None
    for marker_language, candidate in keywords.instruction_markers:
        if candidate.upper() in line:
            language, marker = marker_language, candidate
            break

    if marker is None:
        if pending is None:
            return None
        language, marker = pending.language, pending.marker

    description = _find_description(line, language, keywords)
    if description is not None:
        return InstructionMatch(language=language, marker=marker, description=description)

    if pending is None and language in keywords.split_marker_languages:
        return InstructionMatch(language=language, marker=marker)

    logger.debug("instruction_description_not_found", language=language.value, line=line.strip())
    return None


def find_instruction_lines(lines: list[str], keywords: KeywordDictionary) -> set[int]:
    """
    Indexes of every instruction marker line, including the second line
    of a split French marker. Blank lines are ignored.
    """
    indexes = set()
    pending = None

    for i, line in enumerate(lines):
        if not line.strip():
            continue

        match = detect_instruction(line, keywords, pending)
        if match is None:
            pending = None
            continue

        indexes.add(i)
        pending = match if match.awaiting_description else None

    return indexes


def identify_instruction(
    shipment: Shipment,
    text: str,
    keywords: KeywordDictionary,
) -> tuple[str, bool]:
    """
    Set instruction type and document language from the first lines.

    Only the first two non-blank lines are checked. A composed label that
    is not a known InstructionType still sets the language.

    Returns:
        (text after the instruction line, found)
    """
    lines = text.splitlines()
    pending = None
    scanned = 0

    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if scanned >= INSTRUCTION_SCAN_LINES:
            break
        scanned += 1

        match = detect_instruction(line, keywords, pending)
        if match is None:
            pending = None
            continue
        if match.awaiting_description:
            pending = match
            continue

        shipment.doc_lang = match.language
        label = match.label(keywords)

        try:
            shipment.instruction_type = InstructionType(label)
        except ValueError:
            logger.warning("instruction_type_unknown", label=label, language=match.language.value)
            shipment.add_warning(
                WarningCode.INSTRUCTION_TYPE_UNKNOWN,
                f"Instruction '{label}' is not a known instruction type",
                field="instruction_type",
                value=label,
            )
        else:
            logger.info(
                "instruction_identified",
                instruction_type=label,
                language=match.language.value,
            )

        return "\n".join(lines[i + 1:]), True

    logger.info("instruction_not_found")
    shipment.add_warning(
        WarningCode.INSTRUCTION_NOT_FOUND,
        "Instruction type and document language could not be detected",
        field="instruction_type",
    )
    return text, False


def identify_shipment_id(
    shipment: Shipment,
    text: str,
    keywords: KeywordDictionary,
) -> tuple[str, bool]:
    """
    Set the shipment id from the first line starting with "Shipment".

    - "Shipment: 4359172 Hoyer GmbH" → 4359172
    - "Shipment 5120033" → 5120033

    A malformed id is treated as not found; the text is returned
    unconsumed.

    Returns:
        (text after the shipment id line, found)
    """
    lines = text.splitlines()
    label = keywords.shipment_id_label

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped.startswith(label):
            continue

        value = stripped[len(label):].strip().removeprefix(":").strip()
        for suffix in keywords.vendor_suffixes:
            value = value.removesuffix(suffix).strip()

        if not (value.isascii() and value.isdigit()):
            logger.warning("shipment_id_invalid", value=value, line=stripped)
            shipment.add_warning(
                WarningCode.SHIPMENT_ID_INVALID,
                f"Shipment id '{value}' is not a number",
                field="shipment_id",
                value=value,
            )
            return text, False

        shipment.shipment_id = int(value)
        logger.info("shipment_id_identified", shipment_id=shipment.shipment_id)
        return "\n".join(lines[i + 1:]), True

    logger.info("shipment_id_not_found")
    shipment.add_warning(
        WarningCode.SHIPMENT_ID_NOT_FOUND,
        "No shipment id line found",
        field="shipment_id",
    )
    return text, False


def identify_delivery_details(
    shipment: Shipment,
    text: str,
    keywords: KeywordDictionary,
    column_gap: int = 2,
) -> tuple[str, bool]:
    """
    Fill shipment-level details and find where the task sections start.

    Scans every line of the full document text. Each header field is
    filled at most once. Once the general remark label is found, following
    lines are appended to it until a line starts with a task keyword; that
    line starts the remainder unless a task heading was already seen above
    the remark.

    Args:
        shipment: Shipment to fill
        text: Full document text
        keywords: Keyword dictionary
        column_gap: Whitespace run that ends a single-value field

    Returns:
        (text from the first task heading on, any detail found)
    """
    lines = text.splitlines()
    language = shipment.doc_lang
    task_keywords = keywords.all_task_keywords
    instruction_lines = find_instruction_lines(lines, keywords)

    truck_labels = keywords.labels(DetailField.TRUCK, language)
    driver_labels = keywords.labels(DetailField.DRIVER, language)
    chassis_labels = keywords.labels(DetailField.CHASSIS, language)
    container_labels = keywords.labels(DetailField.CONTAINER, language)
    tank_details_labels = keywords.labels(DetailField.TANK_DETAILS, language)
    general_remark_labels = keywords.labels(DetailField.GENERAL_REMARK, language)

    found = False
    in_general_remark = False
    tank_details_index = None
    kg_appended = False
    task_start = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        lowered = stripped.lower()

        if in_general_remark:
            if i not in instruction_lines and lowered.startswith(task_keywords):
                logger.debug("general_remark_ended", line_index=i)
                start = task_start if task_start is not None else i
                return "\n".join(lines[start:]), found
            if stripped:
                shipment.general_remark = f"{shipment.general_remark} {stripped}".strip()
            continue

        if not stripped or i in instruction_lines:
            continue

        if task_start is None and lowered.startswith(task_keywords):
            task_start = i

        if not shipment.car_id:
            value = match_label(stripped, truck_labels)
            if value is not None:
                shipment.car_id = extract_until_multiple_spaces(value, column_gap).upper()
                found = True

        if not shipment.driver_name:
            value = match_label(stripped, driver_labels)
            if value is not None:
                shipment.driver_name = extract_until_multiple_spaces(value, column_gap).upper()
                found = True

        if not shipment.chassis:
            value = match_label(stripped, chassis_labels)
            if value is not None:
                shipment.chassis = extract_until_multiple_spaces(value, column_gap).upper()
                found = True

        if not shipment.container:
            is_tank_status = "status" in lowered or "etat du" in lowered
            is_tank_details = lowered.startswith(tank_details_labels)
            if not is_tank_status and not is_tank_details:
                value = match_label(stripped, container_labels)
                if value is not None:
                    shipment.container = extract_until_multiple_spaces(value, column_gap).upper()
                    found = True

        if not shipment.tank_details:
            value = match_label(stripped, tank_details_labels)
            if value is not None:
                shipment.tank_details = extract_until_multiple_spaces(value, column_gap)
                tank_details_index = i
                found = True
        elif not kg_appended and tank_details_index is not None and i > tank_details_index:
            kg_match = KG_PATTERN.search(lowered)
            if kg_match:
                shipment.tank_details = f"{shipment.tank_details} - {kg_match.group(1)}Kg"
                kg_appended = True

        if not shipment.general_remark:
            value = match_label(stripped, general_remark_labels)
            if value is not None:
                shipment.general_remark = value
                in_general_remark = True
                found = True

    if task_start is None:
        logger.info("task_start_not_found", shipment_id=shipment.shipment_id)
        return "", found

    return "\n".join(lines[task_start:]), found
