"""
Core Schemas

Public API for the data model shared by the association compiler and
the inventory orchestrator.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    CanonicalizationError,
    canonicalize_value,
    dumps_canonical,
    serialized_size,
)

# Error models and exceptions
from .errors import (
    AgentError,
    ErrorCodes,
    FleetException,
    GathererExecutionException,
    InvalidInventoryPolicyException,
    InventoryCycleException,
    MalformedDocumentException,
    SizeLimitExceededException,
    UnrecognizedParameterType,
    UnregisteredGathererException,
)

# Document body schemas
from .document import (
    DocumentContent,
    InstancePluginConfig,
    ParameterDefinition,
    ParameterType,
    PluginConfig,
)

# Association message schemas
from .association import (
    AssociationPayload,
    OutputLocation,
    RawAssociationMessage,
    S3OutputLocation,
)

# Document execution state
from .state import (
    DOCUMENT_STATUS_IN_PROGRESS,
    DOCUMENT_TYPE_ASSOCIATION,
    DocumentInformation,
    DocumentState,
    NamedPlugins,
    OrderedPlugins,
    PluginConfiguration,
    PluginLayout,
    PluginState,
)

# Inventory schemas
from .inventory import (
    DEFAULT_ITEM_SCHEMA_VERSION,
    InventoryBatch,
    InventoryItem,
    InventoryPolicy,
)


__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "CanonicalizationError",
    "canonicalize_value",
    "dumps_canonical",
    "serialized_size",
    # Errors
    "AgentError",
    "ErrorCodes",
    "FleetException",
    "GathererExecutionException",
    "InvalidInventoryPolicyException",
    "InventoryCycleException",
    "MalformedDocumentException",
    "SizeLimitExceededException",
    "UnrecognizedParameterType",
    "UnregisteredGathererException",
    # Document
    "DocumentContent",
    "InstancePluginConfig",
    "ParameterDefinition",
    "ParameterType",
    "PluginConfig",
    # Association
    "AssociationPayload",
    "OutputLocation",
    "RawAssociationMessage",
    "S3OutputLocation",
    # State
    "DOCUMENT_STATUS_IN_PROGRESS",
    "DOCUMENT_TYPE_ASSOCIATION",
    "DocumentInformation",
    "DocumentState",
    "NamedPlugins",
    "OrderedPlugins",
    "PluginConfiguration",
    "PluginLayout",
    "PluginState",
    # Inventory
    "DEFAULT_ITEM_SCHEMA_VERSION",
    "InventoryBatch",
    "InventoryItem",
    "InventoryPolicy",
]
