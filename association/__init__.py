"""
Association Compilation

Turns server-issued association documents into executable document
state for the plugin runner.

Public API:
- DocumentCompiler: Compiles a RawAssociationMessage into DocumentState
- parse_document_with_params: Decode a document body and bind parameters
- initialize_document_state: Build DocumentState from a parsed payload
- resolve_parameters: Build the parameter binding table
- substitute_parameters: Apply bindings to plugin inputs
"""

from association.identity import document_id_for, message_id_for, new_document_info
from association.parameters import resolve_parameters, substitute_parameters
from association.parser import (
    DocumentCompiler,
    build_plugins,
    initialize_document_state,
    parse_document_content,
    parse_document_with_params,
)


__all__ = [
    "DocumentCompiler",
    "build_plugins",
    "initialize_document_state",
    "parse_document_content",
    "parse_document_with_params",
    "resolve_parameters",
    "substitute_parameters",
    "document_id_for",
    "message_id_for",
    "new_document_info",
]
