"""Composition of the final configuration document."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from ..models.datastore import (
    AlertServerConfig,
    CameraConfig,
    DataStore,
    InferenceServer,
    InferenceServerBinding,
    utc_now,
)
from .identifiers import IdFactory, camera_id, new_id_suffix
from .inventory import CameraInventoryEntry


class ConfigAssembler:
    """Builds camera records and the root ``DataStore``; no validation here."""

    def __init__(self, id_factory: IdFactory = new_id_suffix):
        self.id_factory = id_factory

    def camera_record(
        self,
        entry: CameraInventoryEntry,
        bindings: Sequence[InferenceServerBinding],
        timestamp: datetime | None = None,
    ) -> CameraConfig:
        timestamp = timestamp or utc_now()
        return CameraConfig(
            id=camera_id(self.id_factory),
            name=entry.device_name,
            rtsp_url=entry.stream_address,
            inference_server_bindings=list(bindings) or None,
            enabled=True,
            running=True,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def assemble(
        self,
        cameras: Iterable[CameraConfig],
        servers: Mapping[str, InferenceServer],
        alert_server_url: str,
        timestamp: datetime | None = None,
    ) -> DataStore:
        """Compose cameras, servers and the alert server block."""
        return DataStore(
            cameras={camera.id: camera for camera in cameras},
            inference_servers=dict(servers),
            alert_server=AlertServerConfig(
                url=alert_server_url,
                enabled=False,
                updated_at=timestamp or utc_now(),
            ),
        )
