"""
CLI Compile Command

Compile an association message into the document state handed to the
plugin runner.

Usage:
    fleet compile association.json [--out state.json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from association import DocumentCompiler
from core.schemas.association import RawAssociationMessage
from core.schemas.errors import MalformedDocumentException, UnrecognizedParameterType


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_INPUT = 2


def load_association(path: Path) -> RawAssociationMessage:
    """
    Read an association message from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a valid association message
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    return RawAssociationMessage.model_validate(data)


def compile_cmd(args: Namespace) -> int:
    """Handle compile command."""
    path = Path(args.association)

    try:
        raw = load_association(path)
    except OSError as e:
        print(f"Error: Unable to read {path}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Error: Invalid association message in {path}: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    compiler = DocumentCompiler(config=args.runtime_config)
    anomalies: list[UnrecognizedParameterType] = []

    try:
        payload = compiler.parse(raw, anomalies=anomalies)
        state = compiler.compile(raw, payload)
    except MalformedDocumentException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    for anomaly in anomalies:
        print(f"Warning: {anomaly.message}", file=sys.stderr)

    output = json.dumps(state.to_wire(), indent=2)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote document state to {out_path}")
        print(f"Document state saved to: {out_path}")
    else:
        print(output)

    return EXIT_SUCCESS
