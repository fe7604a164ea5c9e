"""
Shipment parser service.

Turns one shipment instruction document into a Shipment:
1. Extract layout text from the PDF
2. Header: instruction type + language, shipment id, delivery details
3. Split the remainder into task sections
4. Parse the fields of every retained section

Only text extraction can fail. Everything else the parser cannot read
ends up in Shipment.warnings for the manager to review.
"""

from typing import Optional

import structlog

from config import get_settings
from models.shipment import Shipment, WarningCode
from parsers.keywords import KeywordDictionary, build_keyword_dictionary
from parsers.header_parser import (
    identify_instruction,
    identify_shipment_id,
    identify_delivery_details,
)
from parsers.task_segmenter import extract_task_sections, is_retained_section
from parsers.task_field_parser import parse_task_details
from services.text_extraction_service import TextExtractionService

logger = structlog.get_logger(__name__)


class ShipmentParserService:
    """
    Parse shipment instruction documents.

    Stateless between calls: the keyword dictionary is immutable, and
    every parse builds a fresh Shipment, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        keywords: KeywordDictionary,
        extractor: Optional[TextExtractionService] = None,
        column_gap: int = 2,
    ):
        self.keywords = keywords
        self.extractor = extractor or TextExtractionService()
        self.column_gap = column_gap

    def parse_document(self, path: str) -> Shipment:
        """
        Parse a PDF document.

        Args:
            path: File system path of the PDF

        Returns:
            Shipment, possibly with warnings

        Raises:
            DocumentNotFoundError: If the file does not exist
            TextExtractionError: If the document yields no usable text
        """
        logger.info("shipment_document_parse_started", path=path)
        extracted = self.extractor.extract_text(path)
        shipment = self.parse_text(extracted.text)

        if not extracted.complete:
            shipment.add_warning(
                WarningCode.PARTIAL_TEXT_EXTRACTION,
                "Text extraction did not finish cleanly; some content may be missing",
                value=extracted.backend,
            )

        return shipment

    def parse_text(self, text: str) -> Shipment:
        """
        Parse already extracted document text.

        Args:
            text: Layout-preserving document text

        Returns:
            Shipment, possibly with warnings
        """
        shipment = Shipment()

        after_instruction, _ = identify_instruction(shipment, text, self.keywords)
        identify_shipment_id(shipment, after_instruction, self.keywords)
        # Vendor layouts interleave details with the id block: scan everything
        remainder, _ = identify_delivery_details(
            shipment, text, self.keywords, column_gap=self.column_gap
        )

        sections = extract_task_sections(remainder, self.keywords)
        retained = [s for s in sections if is_retained_section(s)]
        if len(retained) < len(sections):
            logger.debug(
                "task_sections_discarded",
                shipment_id=shipment.shipment_id,
                discarded=len(sections) - len(retained),
            )

        for index, section in enumerate(retained):
            section.shipment_id = shipment.shipment_id
            warnings = parse_task_details(
                section,
                self.keywords,
                language=shipment.doc_lang,
                column_gap=self.column_gap,
                task_index=index,
            )
            shipment.warnings.extend(warnings)

        shipment.tasks = retained

        if not retained:
            shipment.add_warning(
                WarningCode.NO_TASKS_FOUND,
                "No task sections found in the document",
                field="tasks",
            )

        logger.info(
            "shipment_parsed",
            shipment_id=shipment.shipment_id,
            instruction_type=shipment.instruction_type.value if shipment.instruction_type else None,
            language=shipment.doc_lang.value if shipment.doc_lang else None,
            tasks=[t.task_type.value for t in shipment.tasks],
            warnings=len(shipment.warnings),
        )
        return shipment


# Singleton instance
_shipment_parser_service: Optional[ShipmentParserService] = None


def get_shipment_parser_service() -> ShipmentParserService:
    """Get or create ShipmentParserService instance."""
    global _shipment_parser_service
    if _shipment_parser_service is None:
        settings = get_settings()
        _shipment_parser_service = ShipmentParserService(
            keywords=build_keyword_dictionary(),
            extractor=TextExtractionService(settings),
            column_gap=settings.column_gap_spaces,
        )
    return _shipment_parser_service
