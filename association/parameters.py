"""
Parameter Resolver

Binds caller-supplied association parameters to the parameters a
document declares, then substitutes ``{{ name }}`` placeholders in
plugin inputs.

Supplied parameters the document does not declare are dropped and never
reach substitution. A declared parameter of an unknown type is skipped
and reported, never fatal.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional, Sequence

from core.schemas.document import ParameterDefinition, ParameterType
from core.schemas.errors import UnrecognizedParameterType


logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")


def resolve_parameters(
    supplied: Mapping[str, Sequence[Optional[str]]],
    declared: Mapping[str, ParameterDefinition],
    *,
    anomalies: Optional[list[UnrecognizedParameterType]] = None,
) -> dict[str, Any]:
    """
    Build the parameter binding table.

    Args:
        supplied: Parameter values from the association, always lists
        declared: Parameter definitions from the document
        anomalies: If given, receives one record per skipped parameter

    Returns:
        Mapping of declared parameter name to resolved value. Every
        declared parameter is present; the value is None when neither a
        supplied value nor a default exists.
    """
    result: dict[str, Any] = {}

    for name, values in supplied.items():
        definition = declared.get(name)
        if definition is None:
            logger.debug(f"Dropping undeclared parameter {name}")
            continue

        if definition.param_type == ParameterType.STRING:
            if values:
                result[name] = values[0]
        elif definition.param_type == ParameterType.STRING_LIST:
            result[name] = list(values)
        else:
            anomaly = UnrecognizedParameterType(
                message=f"unknown parameter type {definition.param_type}",
                parameter=name,
                declared_type=definition.param_type,
            )
            logger.warning(f"Skipping parameter {name}: {anomaly.message}")
            if anomalies is not None:
                anomalies.append(anomaly)

    for name, definition in declared.items():
        if name not in result:
            result[name] = definition.default

    return result


def substitute_parameters(value: Any, bindings: Mapping[str, Any]) -> Any:
    """
    Replace ``{{ name }}`` placeholders throughout a plugin input tree.

    - A string that is exactly one placeholder becomes the bound value
      itself, so StringList bindings stay lists.
    - Placeholders inside longer strings are replaced only by string
      bindings.
    - Unknown names and None bindings leave the placeholder as written.
    """
    if isinstance(value, str):
        return _substitute_string(value, bindings)
    if isinstance(value, dict):
        return {k: substitute_parameters(v, bindings) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_parameters(v, bindings) for v in value]
    return value


def _substitute_string(text: str, bindings: Mapping[str, Any]) -> Any:
    whole = _PLACEHOLDER.fullmatch(text.strip())
    if whole:
        bound = bindings.get(whole.group(1))
        return text if bound is None else bound

    def _replace(match: re.Match[str]) -> str:
        bound = bindings.get(match.group(1))
        if isinstance(bound, str):
            return bound
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, text)
