"""
Document run identity.

Repeated runs of one association share a message id (for correlation)
but get a fresh run id and document id each time.
"""

from __future__ import annotations

from datetime import datetime

from core.schemas.association import RawAssociationMessage
from core.schemas.state import DOCUMENT_STATUS_IN_PROGRESS, DocumentInformation
from core.times import to_iso8601_utc, to_iso_dash_utc


def message_id_for(association_id: str, instance_id: str) -> str:
    return f"aws.ssm.{association_id}.{instance_id}"


def document_id_for(association_id: str, run_id: str) -> str:
    return f"{association_id}.{run_id}"


def new_document_info(
    raw: RawAssociationMessage,
    document_name: str,
    run_time: datetime,
) -> DocumentInformation:
    """Create the identity of a single document run at ``run_time``."""
    run_id = to_iso_dash_utc(run_time)
    return DocumentInformation(
        document_id=document_id_for(raw.association_id, run_id),
        association_id=raw.association_id,
        instance_id=raw.instance_id,
        message_id=message_id_for(raw.association_id, raw.instance_id),
        run_id=run_id,
        created_date=to_iso8601_utc(raw.create_date),
        document_name=document_name,
        is_command=False,
        document_status=DOCUMENT_STATUS_IN_PROGRESS,
        run_once=raw.run_once,
        document_trace_output="",
    )
