"""
Audit trail of generated proposals.

`record_safely` is meant to run after the response is produced (a FastAPI
background task): any failure is logged and swallowed, the generated document
is still reported as a success.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travel_admin.errors import AuditWriteError
from travel_admin.models import GenerationType, PdfAudit
from travel_admin.schemas import ProposalForm
from travel_admin.services.document_store import GeneratedDocument

logger = logging.getLogger("travel_admin.audit")


class AuditRecorder:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def record(
        self,
        form: ProposalForm,
        actor_id: str,
        document: GeneratedDocument,
        generation_type: str,
        destination_id: Optional[int] = None,
        package_id: Optional[int] = None,
    ) -> int:
        """Insert one audit row and return its id. Raises `AuditWriteError`."""
        try:
            db = self.session_factory()
        except SQLAlchemyError as e:
            raise AuditWriteError(f"Audit store unavailable: {e}") from e
        try:
            row = PdfAudit(
                admin_user_id=actor_id,
                customer_name=form.customerInfo.customerName,
                destination_id=destination_id,
                package_id=package_id,
                form_data=form.model_dump(mode="json"),
                pdf_filename=document.filename,
                generation_type=GenerationType(generation_type),
                file_size_kb=document.file_size_kb,
                download_count=0,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.id
        except (SQLAlchemyError, ValueError) as e:
            db.rollback()
            raise AuditWriteError(f"Failed to save audit record: {e}") from e
        finally:
            db.close()

    def record_safely(self, *args, **kwargs) -> Optional[int]:
        try:
            audit_id = self.record(*args, **kwargs)
        except Exception:
            logger.exception("audit write failed")
            return None
        logger.info("audit record saved", extra={"audit_id": audit_id})
        return audit_id
