"""
Shipment document API routes.

Managers upload a shipment instruction PDF; the response carries the
parsed shipment and the chat readout to review before dispatch.
"""

import os
import uuid

from fastapi import APIRouter, UploadFile, File
from fastapi.responses import JSONResponse
import structlog

from config import get_settings
from models.shipment import ParseTextRequest, ShipmentParseResponse, Shipment
from services.shipment_parser_service import get_shipment_parser_service
from integrations.shipment_messages import render_shipment_message
from exceptions import AppError, InvalidDocumentError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/shipments", tags=["Shipments"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def _build_response(shipment: Shipment) -> ShipmentParseResponse:
    return ShipmentParseResponse(
        shipment=shipment,
        warning_count=len(shipment.warnings),
        message_html=render_shipment_message(shipment),
    )


# ===================
# ROUTES
# ===================

@router.post("/parse", response_model=ShipmentParseResponse)
async def parse_shipment_document(
    file: UploadFile = File(..., description="Shipment instruction PDF")
):
    """
    Upload and parse a shipment instruction PDF.

    The file is saved to the document storage directory, then parsed.
    Fields the parser could not read are listed in `shipment.warnings`.
    """
    try:
        settings = get_settings()

        logger.info(
            "shipment_upload_started",
            filename=file.filename,
            content_type=file.content_type
        )

        if not file.filename or not file.filename.lower().endswith(".pdf"):
            raise InvalidDocumentError(
                "File must be a PDF",
                details={"filename": file.filename}
            )

        contents = await file.read()

        if len(contents) == 0:
            raise InvalidDocumentError("Uploaded file is empty", details={"filename": file.filename})

        if len(contents) > settings.max_upload_size_bytes:
            raise InvalidDocumentError(
                f"File exceeds {settings.max_upload_size_mb} MB",
                details={"filename": file.filename, "size_bytes": len(contents)}
            )

        os.makedirs(settings.outdocs_path, exist_ok=True)
        path = os.path.join(
            settings.outdocs_path,
            f"{uuid.uuid4().hex}_{os.path.basename(file.filename)}"
        )
        with open(path, "wb") as f:
            f.write(contents)

        logger.info("shipment_document_saved", path=path, size_bytes=len(contents))

        shipment = get_shipment_parser_service().parse_document(path)
        return _build_response(shipment)

    except Exception as e:
        return handle_error(e)


@router.post("/parse-text", response_model=ShipmentParseResponse)
async def parse_shipment_text(request: ParseTextRequest):
    """
    Parse already extracted document text.

    Useful when the text was produced elsewhere (another extractor, a
    stored copy of an earlier upload).
    """
    try:
        shipment = get_shipment_parser_service().parse_text(request.text)
        return _build_response(shipment)
    except Exception as e:
        return handle_error(e)
