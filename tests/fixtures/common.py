"""
Common test fixtures shared by all modules.

Provides factory functions for association inputs:
- Step-form (mainSteps) and legacy (runtimeConfig) document bodies
- RawAssociationMessage
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from core.schemas.association import RawAssociationMessage


DEFAULT_CREATE_DATE = datetime(2026, 1, 27, 21, 35, 0, 123000, tzinfo=timezone.utc)


# =============================================================================
# Document Factories
# =============================================================================

def make_step_document(
    steps: Optional[list[dict[str, Any]]] = None,
    parameters: Optional[dict[str, Any]] = None,
    schema_version: str = "2.2",
) -> str:
    """
    Create a step-form document body.

    Defaults to a single aws:runShellScript step named step1.
    """
    if steps is None:
        steps = [
            {
                "action": "aws:runShellScript",
                "name": "step1",
                "inputs": {"runCommand": ["echo hello"]},
            }
        ]
    body: dict[str, Any] = {
        "schemaVersion": schema_version,
        "description": "Step document for testing",
        "mainSteps": steps,
    }
    if parameters is not None:
        body["parameters"] = parameters
    return json.dumps(body)


def make_legacy_document(
    runtime_config: Optional[dict[str, Any]] = None,
    parameters: Optional[dict[str, Any]] = None,
    schema_version: str = "1.2",
) -> str:
    """
    Create a legacy (runtimeConfig) document body.

    Defaults to a single aws:runScript plugin.
    """
    if runtime_config is None:
        runtime_config = {
            "aws:runScript": {
                "properties": [{"id": "0.aws:runScript", "runCommand": ["echo hello"]}],
            }
        }
    body: dict[str, Any] = {
        "schemaVersion": schema_version,
        "description": "Legacy document for testing",
        "runtimeConfig": runtime_config,
    }
    if parameters is not None:
        body["parameters"] = parameters
    return json.dumps(body)


# =============================================================================
# Association Factory
# =============================================================================

def make_association_message(
    association_id: str = "assoc-1",
    instance_id: str = "i-1",
    document: Optional[str] = None,
    parameters: Optional[dict[str, list[Optional[str]]]] = None,
    name: str = "AWS-RunShellScript",
    bucket: Optional[str] = "b",
    key_prefix: Optional[str] = "p",
    run_once: bool = False,
    create_date: datetime = DEFAULT_CREATE_DATE,
) -> RawAssociationMessage:
    """
    Create a RawAssociationMessage for testing.

    Pass bucket=None and key_prefix=None to omit the output location.
    """
    data: dict[str, Any] = {
        "AssociationId": association_id,
        "InstanceId": instance_id,
        "Name": name,
        "Document": document if document is not None else make_step_document(),
        "Parameters": parameters or {},
        "RunOnce": run_once,
        "CreateDate": create_date,
    }
    if bucket is not None or key_prefix is not None:
        data["OutputLocation"] = {
            "S3Location": {
                "OutputS3BucketName": bucket,
                "OutputS3KeyPrefix": key_prefix,
            }
        }
    return RawAssociationMessage.model_validate(data)
