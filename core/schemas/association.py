"""
Core Schemas
File: association.py

Purpose: The raw association message delivered by the poller, and the
payload the parser derives from it.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .document import DocumentContent


class S3OutputLocation(BaseModel):
    """Where plugin output should be uploaded."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    bucket_name: str | None = Field(default=None, alias="OutputS3BucketName")
    key_prefix: str | None = Field(default=None, alias="OutputS3KeyPrefix")
    region: str | None = Field(default=None, alias="OutputS3Region")


class OutputLocation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    s3_location: S3OutputLocation | None = Field(default=None, alias="S3Location")


class RawAssociationMessage(BaseModel):
    """
    Association as received from the service. Immutable once received.

    ``document`` is the opaque document JSON text; it is decoded by the
    parser, never here, so a malformed body surfaces as
    MalformedDocumentException at compile time.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    association_id: str = Field(..., alias="AssociationId", min_length=1)
    instance_id: str = Field(..., alias="InstanceId", min_length=1)
    name: str = Field(default="", alias="Name", description="Document name")
    document: str = Field(..., alias="Document", description="Opaque document JSON")
    parameters: dict[str, list[str | None]] = Field(
        default_factory=dict,
        alias="Parameters",
        description="Caller-supplied parameter values, always as lists",
    )
    run_once: bool = Field(default=False, alias="RunOnce")
    create_date: datetime = Field(..., alias="CreateDate")
    output_location: OutputLocation | None = Field(default=None, alias="OutputLocation")

    @property
    def output_s3_bucket_name(self) -> str:
        s3 = self.output_location.s3_location if self.output_location else None
        return (s3.bucket_name or "") if s3 else ""

    @property
    def output_s3_key_prefix(self) -> str:
        s3 = self.output_location.s3_location if self.output_location else None
        return (s3.key_prefix or "") if s3 else ""


class AssociationPayload(BaseModel):
    """
    Parsed document body with parameters resolved and substituted.

    This is the "resolved document" handed to the document compiler.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    document_name: str
    command_id: str
    document_content: DocumentContent
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Resolved parameter binding table",
    )
    output_s3_bucket_name: str = ""
    output_s3_key_prefix: str = ""
