"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from unittest.mock import MagicMock

from parsers.keywords import KeywordDictionary, build_keyword_dictionary
from services.shipment_parser_service import ShipmentParserService
from services.text_extraction_service import TextExtractionService, ExtractedText
from tests.factories import ENGLISH_DOC, GERMAN_DOC, FRENCH_DOC


# ===================
# PARSER FIXTURES
# ===================

@pytest.fixture
def keywords() -> KeywordDictionary:
    """Default keyword dictionary."""
    return build_keyword_dictionary()


@pytest.fixture
def mock_extractor() -> MagicMock:
    """
    Text extractor that returns the English sample document.

    Usage:
        def test_something(mock_extractor):
            mock_extractor.extract_text.return_value = ExtractedText(...)
    """
    extractor = MagicMock(spec=TextExtractionService)
    extractor.extract_text.return_value = ExtractedText(text=ENGLISH_DOC, backend="pdftotext")
    return extractor


@pytest.fixture
def parser_service(keywords, mock_extractor) -> ShipmentParserService:
    """Shipment parser with the default dictionary and a mocked extractor."""
    return ShipmentParserService(keywords=keywords, extractor=mock_extractor)


@pytest.fixture
def english_doc() -> str:
    return ENGLISH_DOC


@pytest.fixture
def german_doc() -> str:
    return GERMAN_DOC


@pytest.fixture
def french_doc() -> str:
    return FRENCH_DOC


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
