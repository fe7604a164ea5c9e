"""
Shipment instruction document parsers.

Header, task segmentation and task field parsing for the text of
multi-language (French/German/English) shipment instruction PDFs.
"""

from parsers.keywords import (
    DetailField,
    KeywordDictionary,
    build_keyword_dictionary,
)
from parsers.countries import (
    Country,
    COUNTRIES,
    extract_country,
    extract_country_code,
)
from parsers.header_parser import (
    InstructionMatch,
    detect_instruction,
    find_instruction_lines,
    identify_instruction,
    identify_shipment_id,
    identify_delivery_details,
)
from parsers.task_segmenter import (
    identify_task_type,
    extract_task_sections,
    is_retained_section,
)
from parsers.task_field_parser import (
    find_address,
    find_company,
    parse_time_range,
    get_task_details,
    parse_task_details,
)

__all__ = [
    # Keywords
    "DetailField",
    "KeywordDictionary",
    "build_keyword_dictionary",

    # Countries
    "Country",
    "COUNTRIES",
    "extract_country",
    "extract_country_code",

    # Header
    "InstructionMatch",
    "detect_instruction",
    "find_instruction_lines",
    "identify_instruction",
    "identify_shipment_id",
    "identify_delivery_details",

    # Tasks
    "identify_task_type",
    "extract_task_sections",
    "is_retained_section",
    "find_address",
    "find_company",
    "parse_time_range",
    "get_task_details",
    "parse_task_details",
]
