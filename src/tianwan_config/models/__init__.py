"""Domain models for Tianwan Config."""

from .capability import (
    DEFAULT_CAPABILITIES,
    DEFAULT_ENDPOINT_ALIASES,
    DEFAULT_VOCABULARY,
    SPECIALIZED_CAPABILITY,
    TYPE_A_CAPABILITIES,
    Capability,
)
from .datastore import (
    AlertServerConfig,
    CameraConfig,
    DataStore,
    InferenceServer,
    InferenceServerBinding,
)

__all__ = [
    "Capability",
    "DEFAULT_CAPABILITIES",
    "DEFAULT_ENDPOINT_ALIASES",
    "DEFAULT_VOCABULARY",
    "SPECIALIZED_CAPABILITY",
    "TYPE_A_CAPABILITIES",
    "AlertServerConfig",
    "CameraConfig",
    "DataStore",
    "InferenceServer",
    "InferenceServerBinding",
]
