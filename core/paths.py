"""
Path construction helpers.

S3 keys always use "/" and are cleaned the way a POSIX path join would
be (empty segments skipped, duplicate separators and "." removed).
Orchestration directories live on the host and use the host separator.
"""

from __future__ import annotations

import os
import posixpath


def build_s3_path(*elements: str) -> str:
    """
    Join S3 key segments with "/".

    Empty segments are skipped, so a missing key prefix simply drops out:
    ``build_s3_path("", "assoc", "i-1") == "assoc/i-1"``.
    """
    parts = [e for e in elements if e]
    if not parts:
        return ""
    return posixpath.normpath(posixpath.join(*parts))


def build_path(root: str, *elements: str) -> str:
    """Join host filesystem path segments and normalize the result."""
    parts = [e for e in (root, *elements) if e]
    if not parts:
        return ""
    return os.path.normpath(os.path.join(*parts))


def orchestration_root_dir(
    data_store_path: str,
    instance_id: str,
    document_root_dir_name: str,
    orchestration_root_dir: str,
) -> str:
    """Root directory under which every document run of an instance keeps its artifacts."""
    return build_path(
        data_store_path,
        instance_id,
        document_root_dir_name,
        orchestration_root_dir,
    )
