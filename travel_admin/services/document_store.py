"""
Storage of generated proposal PDFs in a flat directory served under a URL prefix.

Filenames are deterministic per customer and calendar day, so a second
proposal for the same customer on the same day replaces the first.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from travel_admin.errors import PersistenceError

logger = logging.getLogger("travel_admin.document_store")

FILENAME_PREFIX = "Travel_Proposal"
_SEPARATORS = re.compile(r"[\s\-_]+")
_UNSAFE = re.compile(r"[^A-Za-z0-9_]")
_RUNS = re.compile(r"_+")


@dataclass(frozen=True)
class GeneratedDocument:
    filename: str
    file_path: Path
    file_size_kb: int


def sanitize_customer_name(name: str) -> str:
    """
    Reduce a customer name to letters, digits and single underscores.

    Whitespace and dashes become underscores, other punctuation is dropped:
    "Jane O'Brien" -> "Jane_OBrien".
    """
    token = _SEPARATORS.sub("_", name.strip())
    token = _UNSAFE.sub("", token)
    token = _RUNS.sub("_", token).strip("_")
    return token or "Customer"


def build_proposal_filename(customer_name: str, on: Optional[date] = None) -> str:
    day = (on or date.today()).isoformat()
    return f"{FILENAME_PREFIX}_{sanitize_customer_name(customer_name)}_{day}.pdf"


class GeneratedDocumentStore:
    def __init__(self, output_dir: Path, url_prefix: str = "/generated-pdfs"):
        self.output_dir = Path(output_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def download_url(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def resolve(self, filename: str) -> Optional[Path]:
        """Path of a stored document, or None for unknown or non-flat names."""
        if not filename or filename != os.path.basename(filename) or filename.startswith("."):
            return None
        path = self.output_dir / filename
        return path if path.is_file() else None

    def save(self, filename: str, pdf_bytes: bytes) -> GeneratedDocument:
        target = self.output_dir / filename
        tmp_path = None
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file and swap it in so readers never see a partial PDF
            fd, tmp_path = tempfile.mkstemp(dir=self.output_dir, prefix=".tmp-", suffix=".pdf")
            with os.fdopen(fd, "wb") as fh:
                fh.write(pdf_bytes)
            os.replace(tmp_path, target)
            tmp_path = None
            size_bytes = target.stat().st_size
        except OSError as e:
            logger.exception("pdf write failed", extra={"path": str(target)})
            raise PersistenceError(f"Failed to save PDF: {e}", details=repr(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        size_kb = round(size_bytes / 1024)
        logger.info("pdf saved", extra={"path": str(target), "size_kb": size_kb})
        return GeneratedDocument(filename=filename, file_path=target, file_size_kb=size_kb)
