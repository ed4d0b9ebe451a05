"""
Core Schemas
File: state.py

Purpose: Document execution state handed to the plugin runner.

The plugin collection is a tagged variant:
- NamedPlugins: legacy documents, plugin name -> PluginState
- OrderedPlugins: step documents, PluginState in document order
- None: the document declares no plugins (a no-op for the runner)

Both variants require at least one unit, so "exactly one collection
populated" holds by construction. ``DocumentState.to_wire()`` renders
the shape the runner reads, with the unused collection set to null.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DOCUMENT_TYPE_ASSOCIATION = "Association"
DOCUMENT_STATUS_IN_PROGRESS = "InProgress"


class DocumentInformation(BaseModel):
    """Identity of a single document run. Generated once per compile."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    document_id: str = Field(..., alias="DocumentID")
    association_id: str = Field(..., alias="AssociationID")
    instance_id: str = Field(..., alias="InstanceID")
    message_id: str = Field(..., alias="MessageID")
    run_id: str = Field(..., alias="RunID")
    created_date: str = Field(..., alias="CreatedDate")
    document_name: str = Field(default="", alias="DocumentName")
    is_command: bool = Field(default=False, alias="IsCommand")
    document_status: str = Field(default=DOCUMENT_STATUS_IN_PROGRESS, alias="DocumentStatus")
    run_once: bool = Field(default=False, alias="RunOnce")
    document_trace_output: str = Field(default="", alias="DocumentTraceOutput")


class PluginConfiguration(BaseModel):
    """Per-plugin execution configuration."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    settings: Any = Field(default=None, alias="Settings")
    properties: Any = Field(default=None, alias="Properties")
    output_s3_bucket_name: str = Field(default="", alias="OutputS3BucketName")
    output_s3_key_prefix: str = Field(default="", alias="OutputS3KeyPrefix")
    orchestration_directory: str = Field(default="", alias="OrchestrationDirectory")
    message_id: str = Field(default="", alias="MessageId")
    book_keeping_file_name: str = Field(
        default="",
        alias="BookKeepingFileName",
        description="Correlates on-disk orchestration artifacts with the document run",
    )


class PluginState(BaseModel):
    """
    One plugin execution unit.

    ``has_executed`` starts False and belongs to the execution engine,
    which records progress with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    id: str = Field(..., alias="Id")
    name: str = Field(..., alias="Name")
    configuration: PluginConfiguration = Field(..., alias="Configuration")
    has_executed: bool = Field(default=False, alias="HasExecuted")
    result: Any = Field(default=None, alias="Result")


class NamedPlugins(BaseModel):
    """Legacy layout: units keyed by plugin name."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["named"] = "named"
    plugins: dict[str, PluginState] = Field(..., min_length=1)


class OrderedPlugins(BaseModel):
    """Step layout: units in document order. Execution order depends on it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["ordered"] = "ordered"
    steps: tuple[PluginState, ...] = Field(..., min_length=1)


PluginLayout = Annotated[Union[NamedPlugins, OrderedPlugins], Field(discriminator="kind")]


class DocumentState(BaseModel):
    """Compiled, immutable state of one association document run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    document_information: DocumentInformation
    document_type: str = DOCUMENT_TYPE_ASSOCIATION
    schema_version: str
    plugins: Optional[PluginLayout] = None

    @property
    def plugins_information(self) -> dict[str, PluginState]:
        """Legacy name-keyed units; empty unless the layout is NamedPlugins."""
        if isinstance(self.plugins, NamedPlugins):
            return dict(self.plugins.plugins)
        return {}

    @property
    def instance_plugins_information(self) -> tuple[PluginState, ...]:
        """Ordered step units; empty unless the layout is OrderedPlugins."""
        if isinstance(self.plugins, OrderedPlugins):
            return self.plugins.steps
        return ()

    @property
    def is_noop(self) -> bool:
        return self.plugins is None

    @property
    def plugin_count(self) -> int:
        if isinstance(self.plugins, NamedPlugins):
            return len(self.plugins.plugins)
        if isinstance(self.plugins, OrderedPlugins):
            return len(self.plugins.steps)
        return 0

    def to_wire(self) -> dict[str, Any]:
        """Render the runner-facing JSON shape."""
        named = None
        ordered = None
        if isinstance(self.plugins, NamedPlugins):
            named = {
                k: v.model_dump(mode="json", by_alias=True)
                for k, v in self.plugins.plugins.items()
            }
        elif isinstance(self.plugins, OrderedPlugins):
            ordered = [p.model_dump(mode="json", by_alias=True) for p in self.plugins.steps]

        return {
            "DocumentInformation": self.document_information.model_dump(mode="json", by_alias=True),
            "DocumentType": self.document_type,
            "SchemaVersion": self.schema_version,
            "PluginsInformation": named,
            "InstancePluginsInformation": ordered,
        }
