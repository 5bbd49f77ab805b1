"""Re-run text extraction for one or more documents from the command line.

Manual recovery path for documents left ``failed`` or never processed.

    python scripts/extract_document.py 12 15
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from hr_portal.container import build_container
from hr_portal.core.logging_setup import configure_logging
from hr_portal.documents.model import PipelineResult


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the document extraction pipeline.")
    parser.add_argument("document_ids", nargs="+", type=int)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    failed = 0
    for document_id in args.document_ids:
        outcome = container.extraction_pipeline.run(document_id)
        print(f"document {document_id}: {outcome.result.value} (indexed={outcome.indexed})")
        if outcome.result == PipelineResult.FAILED:
            failed += 1

    raise SystemExit(1 if failed else 0)


if __name__ == "__main__":
    main()
