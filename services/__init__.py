"""
Business logic services.

Each service handles one domain area.
"""

from services.text_extraction_service import (
    TextExtractionService,
    ExtractedText,
    get_text_extraction_service,
)
from services.shipment_parser_service import (
    ShipmentParserService,
    get_shipment_parser_service,
)

__all__ = [
    "TextExtractionService",
    "ExtractedText",
    "get_text_extraction_service",
    "ShipmentParserService",
    "get_shipment_parser_service",
]
