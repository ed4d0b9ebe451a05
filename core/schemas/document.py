"""
Core Schemas
File: document.py

Purpose: Structural shape of an association document body.

A document carries either a legacy ``runtimeConfig`` (plugin name ->
plugin config) or a step-form ``mainSteps`` list, plus a parameter
definition set. Field names follow the document JSON; unknown keys are
ignored so newer server-side fields do not break decoding.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParameterType:
    """Parameter types the resolver knows how to bind."""

    STRING = "String"
    STRING_LIST = "StringList"


class ParameterDefinition(BaseModel):
    """A parameter declared by the document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    param_type: str = Field(
        ...,
        alias="type",
        description="Declared type: String, StringList, or anything else (reported, not bound)",
    )
    default: Any = Field(
        default=None,
        description="Default value used when the caller supplies nothing",
    )
    description: str = Field(default="")
    allowed_values: list[str] | None = Field(default=None, alias="allowedValues")
    allowed_pattern: str | None = Field(default=None, alias="allowedPattern")


class PluginConfig(BaseModel):
    """Legacy (runtimeConfig) plugin configuration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    settings: Any = Field(default=None)
    properties: Any = Field(default=None)
    description: str = Field(default="")


class InstancePluginConfig(BaseModel):
    """Step-form (mainSteps) plugin configuration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    action: str = Field(..., min_length=1, description="Plugin to run, e.g. aws:runShellScript")
    name: str = Field(..., min_length=1, description="Step name, unique within the document")
    inputs: Any = Field(default=None)
    settings: Any = Field(default=None)
    max_attempts: int | None = Field(default=None, alias="maxAttempts")
    on_failure: str | None = Field(default=None, alias="onFailure")
    timeout_seconds: int | None = Field(default=None, alias="timeoutSeconds")


class DocumentContent(BaseModel):
    """Decoded association document body."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    schema_version: str = Field(..., alias="schemaVersion", min_length=1)
    description: str = Field(default="")
    runtime_config: dict[str, PluginConfig] | None = Field(default=None, alias="runtimeConfig")
    main_steps: list[InstancePluginConfig] | None = Field(default=None, alias="mainSteps")
    parameters: dict[str, ParameterDefinition] = Field(default_factory=dict)

    @property
    def has_runtime_config(self) -> bool:
        return bool(self.runtime_config)

    @property
    def has_main_steps(self) -> bool:
        return bool(self.main_steps)
