"""
Parse a shipment instruction document from the command line.

Usage:
    # PDF, parsed shipment as JSON
    python scripts/parse_shipment.py storage/4359172.pdf

    # Text already produced by `pdftotext -layout`, chat readout
    python scripts/parse_shipment.py storage/4359172.txt --text --format html --lang en
"""

import argparse
import os
import sys

# Allow imports from the project root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(_root_dir, ".env"))

from config import get_settings, configure_logging
from exceptions import AppError
from integrations.shipment_messages import render_shipment_message
from services.shipment_parser_service import get_shipment_parser_service


def main():
    parser = argparse.ArgumentParser(
        description="Parse a shipment instruction document into a structured shipment."
    )
    parser.add_argument(
        "path",
        help="Path to the PDF (or text file with --text)",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Input is already extracted layout text, not a PDF",
    )
    parser.add_argument(
        "--format",
        choices=("json", "html"),
        default="json",
        help="Output the shipment as JSON or as the chat readout (default: json)",
    )
    parser.add_argument(
        "--lang",
        choices=("en", "uk"),
        default=None,
        help="Language of the chat readout (default: MESSAGE_LANGUAGE setting)",
    )

    args = parser.parse_args()

    configure_logging(get_settings())
    service = get_shipment_parser_service()

    try:
        if args.text:
            with open(args.path, encoding="utf-8") as f:
                shipment = service.parse_text(f.read())
        else:
            shipment = service.parse_document(os.path.abspath(args.path))
    except AppError as e:
        print(f"ERROR: {e.code}: {e.message}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == "html":
        print(render_shipment_message(shipment, args.lang))
    else:
        print(shipment.model_dump_json(indent=2))

    sys.exit(2 if shipment.has_warnings else 0)


if __name__ == "__main__":
    main()
