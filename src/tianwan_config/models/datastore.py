"""Output schema consumed by the Tianwan platform.

Field names are the platform's wire names and must not change.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(UTC)


class InferenceServer(BaseModel):
    """One inference endpoint serving a single capability at one address."""

    id: str = Field(description="Server identifier, inf_<capability>_<hex>")
    name: str = Field(description="Display name, capability plus 1-based ordinal")
    url: str = Field(description="Inference endpoint URL")
    model_type: str = Field(description="Capability served")
    description: str | None = Field(None, description="Free-form description")
    enabled: bool = Field(True, description="Whether the server takes traffic")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class InferenceServerBinding(BaseModel):
    """Routes one camera capability to one inference server."""

    server_id: str = Field(description="Bound InferenceServer id")
    threshold: float = Field(0.5, description="Lower confidence threshold")
    max_threshold: float = Field(0.0, description="Upper threshold, 0 = unbounded")


class CameraConfig(BaseModel):
    """A monitored camera and its inference bindings."""

    id: str = Field(description="Camera identifier, cam_<hex>")
    name: str = Field(description="Device name from the inventory")
    rtsp_url: str = Field(description="Stream address")
    inference_server_bindings: list[InferenceServerBinding] | None = Field(
        None, description="Bindings, omitted when empty"
    )
    enabled: bool = Field(True, description="Whether the camera is enabled")
    running: bool = Field(True, description="Whether the camera stream is running")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class AlertServerConfig(BaseModel):
    """Global alert server settings."""

    url: str = Field("", description="Alert server URL")
    enabled: bool = Field(False, description="Whether alerts are pushed")
    updated_at: datetime = Field(default_factory=utc_now)


class DataStore(BaseModel):
    """Root of the generated configuration."""

    cameras: dict[str, CameraConfig] = Field(default_factory=dict)
    inference_servers: dict[str, InferenceServer] = Field(default_factory=dict)
    alert_server: AlertServerConfig | None = Field(None)

    def to_document(self) -> dict:
        """JSON-ready document with unset optional fields left out."""
        return self.model_dump(mode="json", exclude_none=True)
