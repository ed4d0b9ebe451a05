"""
Document Compiler

Turns a raw association message into an immutable DocumentState for the
plugin runner.

Two phases:
1. parse_document_with_params: decode the document body, resolve and
   substitute parameters (fails with MalformedDocumentException)
2. initialize_document_state: generate the run identity, compute output
   and orchestration paths, and build one PluginState per plugin

Layout rules:
- non-empty runtimeConfig -> NamedPlugins, id = name = map key
- else non-empty mainSteps -> OrderedPlugins in document order,
  id = step name, name = step action
- else no plugins (no-op document)

Per-plugin paths use the unit's name as the final segment, so the
legacy key or the step action. Existing consumers depend on this.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from core.clock import Clock, RealClock
from core.config import AgentConfig, RuntimeConfig, get_default_config
from core.paths import build_path, build_s3_path, orchestration_root_dir
from core.schemas.association import AssociationPayload, RawAssociationMessage
from core.schemas.document import DocumentContent, InstancePluginConfig, PluginConfig
from core.schemas.errors import MalformedDocumentException, UnrecognizedParameterType
from core.schemas.state import (
    DOCUMENT_TYPE_ASSOCIATION,
    DocumentInformation,
    DocumentState,
    NamedPlugins,
    OrderedPlugins,
    PluginConfiguration,
    PluginLayout,
    PluginState,
)

from association.identity import new_document_info
from association.parameters import resolve_parameters, substitute_parameters


logger = logging.getLogger(__name__)


# =============================================================================
# Phase 1: decode + parameters
# =============================================================================

def parse_document_content(
    document: str | bytes | dict[str, Any],
    *,
    association_id: Optional[str] = None,
) -> DocumentContent:
    """
    Decode an opaque document body into DocumentContent.

    Raises:
        MalformedDocumentException: If the body is not JSON, not an
            object, or does not match the document shape.
    """
    if isinstance(document, (str, bytes)):
        try:
            data = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocumentException(
                f"Document body is not valid JSON: {e}",
                association_id=association_id,
            ) from e
    else:
        data = document

    if not isinstance(data, dict):
        raise MalformedDocumentException(
            f"Document body must be a JSON object, got {type(data).__name__}",
            association_id=association_id,
        )

    try:
        return DocumentContent.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentException(
            f"Document body does not match the expected shape: {e.error_count()} error(s)",
            association_id=association_id,
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e


def _substitute_content(content: DocumentContent, bindings: dict[str, Any]) -> DocumentContent:
    """Apply parameter bindings to plugin properties and step inputs."""
    update: dict[str, Any] = {}

    if content.runtime_config:
        update["runtime_config"] = {
            name: plugin.model_copy(
                update={"properties": substitute_parameters(plugin.properties, bindings)}
            )
            for name, plugin in content.runtime_config.items()
        }

    if content.main_steps:
        update["main_steps"] = [
            step.model_copy(update={"inputs": substitute_parameters(step.inputs, bindings)})
            for step in content.main_steps
        ]

    return content.model_copy(update=update) if update else content


def parse_document_with_params(
    raw: RawAssociationMessage,
    *,
    anomalies: Optional[list[UnrecognizedParameterType]] = None,
) -> AssociationPayload:
    """
    Decode the association's document and bind its parameters.

    Args:
        raw: Association message as received
        anomalies: If given, receives non-fatal parameter anomalies

    Returns:
        AssociationPayload with substituted document content

    Raises:
        MalformedDocumentException: If the document body cannot be decoded
    """
    logger.debug(f"Processing association {raw.association_id} for {raw.instance_id}")

    content = parse_document_content(raw.document, association_id=raw.association_id)
    bindings = resolve_parameters(raw.parameters, content.parameters, anomalies=anomalies)
    logger.debug(f"Resolved parameters for {raw.association_id}: {sorted(bindings)}")

    return AssociationPayload(
        document_name=raw.name,
        command_id=raw.association_id,
        document_content=_substitute_content(content, bindings),
        parameters=bindings,
        output_s3_bucket_name=raw.output_s3_bucket_name,
        output_s3_key_prefix=raw.output_s3_key_prefix,
    )


# =============================================================================
# Phase 2: document state
# =============================================================================

def _plugin_configuration(
    *,
    settings: Any,
    properties: Any,
    plugin_name: str,
    bucket: str,
    s3_key_prefix: str,
    orchestration_dir: str,
    info: DocumentInformation,
) -> PluginConfiguration:
    return PluginConfiguration(
        settings=settings,
        properties=properties,
        output_s3_bucket_name=bucket,
        output_s3_key_prefix=build_s3_path(s3_key_prefix, plugin_name),
        orchestration_directory=build_path(orchestration_dir, plugin_name),
        message_id=info.message_id,
        book_keeping_file_name=info.document_id,
    )


def _named_plugins(
    runtime_config: dict[str, PluginConfig],
    **paths: Any,
) -> NamedPlugins:
    plugins: dict[str, PluginState] = {}
    for plugin_name, plugin_config in runtime_config.items():
        plugins[plugin_name] = PluginState(
            id=plugin_name,
            name=plugin_name,
            configuration=_plugin_configuration(
                settings=plugin_config.settings,
                properties=plugin_config.properties,
                plugin_name=plugin_name,
                **paths,
            ),
            has_executed=False,
        )
    return NamedPlugins(plugins=plugins)


def _ordered_plugins(
    main_steps: list[InstancePluginConfig],
    **paths: Any,
) -> OrderedPlugins:
    steps = []
    for step in main_steps:
        steps.append(PluginState(
            id=step.name,
            name=step.action,
            configuration=_plugin_configuration(
                settings=step.settings,
                properties=step.inputs,
                plugin_name=step.action,
                **paths,
            ),
            has_executed=False,
        ))
    return OrderedPlugins(steps=tuple(steps))


def build_plugins(
    content: DocumentContent,
    info: DocumentInformation,
    *,
    bucket: str,
    s3_key_prefix: str,
    orchestration_dir: str,
) -> Optional[PluginLayout]:
    """Build the plugin layout for a document, or None for a no-op document."""
    paths = {
        "bucket": bucket,
        "s3_key_prefix": s3_key_prefix,
        "orchestration_dir": orchestration_dir,
        "info": info,
    }
    if content.runtime_config:
        return _named_plugins(content.runtime_config, **paths)
    if content.main_steps:
        return _ordered_plugins(content.main_steps, **paths)
    return None


def initialize_document_state(
    raw: RawAssociationMessage,
    payload: AssociationPayload,
    *,
    config: AgentConfig,
    clock: Clock,
) -> DocumentState:
    """
    Build the DocumentState for one run of an association.

    The run identity is generated exactly once, before any plugin unit,
    because every unit's bookkeeping key is the document id.
    """
    info = new_document_info(raw, payload.document_name, clock.now())

    s3_key_prefix = build_s3_path(
        payload.output_s3_key_prefix,
        info.document_id,
        info.instance_id,
    )
    orchestration_dir = build_path(
        orchestration_root_dir(
            config.data_store_path,
            info.instance_id,
            config.document_root_dir_name,
            config.orchestration_root_dir,
        ),
        info.document_id,
    )

    plugins = build_plugins(
        payload.document_content,
        info,
        bucket=payload.output_s3_bucket_name,
        s3_key_prefix=s3_key_prefix,
        orchestration_dir=orchestration_dir,
    )

    return DocumentState(
        document_information=info,
        document_type=DOCUMENT_TYPE_ASSOCIATION,
        schema_version=payload.document_content.schema_version,
        plugins=plugins,
    )


# =============================================================================
# Compiler
# =============================================================================

class DocumentCompiler:
    """
    Compiles association messages into DocumentState.

    Stateless across calls; the clock and configuration are injected so
    run identifiers and paths are reproducible in tests.

    Usage:
        compiler = DocumentCompiler(config=RuntimeConfig(), clock=FrozenClock())
        state = compiler.compile(raw_message)
    """

    def __init__(
        self,
        *,
        config: Optional[RuntimeConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or get_default_config()
        self.clock = clock or RealClock()

    def parse(
        self,
        raw: RawAssociationMessage,
        *,
        anomalies: Optional[list[UnrecognizedParameterType]] = None,
    ) -> AssociationPayload:
        """Phase 1 only: decode and bind parameters."""
        return parse_document_with_params(raw, anomalies=anomalies)

    def compile(
        self,
        raw: RawAssociationMessage,
        payload: Optional[AssociationPayload] = None,
    ) -> DocumentState:
        """
        Compile an association into a DocumentState.

        Args:
            raw: Association message
            payload: Already-parsed payload; parsed from ``raw`` if omitted

        Raises:
            MalformedDocumentException: If the document body cannot be decoded
        """
        if payload is None:
            payload = self.parse(raw)

        state = initialize_document_state(
            raw,
            payload,
            config=self.config.agent,
            clock=self.clock,
        )
        logger.info(
            f"Compiled association {raw.association_id} into document "
            f"{state.document_information.document_id} with {state.plugin_count} plugin(s)"
        )
        return state
