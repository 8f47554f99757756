"""Inference server pool synthesis.

Expands the configured address lists into one ``InferenceServer`` record
per (address, capability) pair. Type-A addresses serve every general
capability; type-B addresses serve only the specialized one.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from ..core.logging import get_logger
from ..models.capability import (
    DEFAULT_ENDPOINT_ALIASES,
    SPECIALIZED_CAPABILITY,
    TYPE_A_CAPABILITIES,
    Capability,
)
from ..models.datastore import InferenceServer, utc_now
from .identifiers import IdFactory, new_id_suffix, server_id

logger = get_logger(__name__)

TYPE_A_POOL = "type_a"
TYPE_B_POOL = "type_b"


@dataclass
class ServerPool:
    """Synthesized servers, indexed by pool and address."""

    servers: dict[str, InferenceServer] = field(default_factory=dict)
    addresses: dict[str, list[str]] = field(
        default_factory=lambda: {TYPE_A_POOL: [], TYPE_B_POOL: []}
    )
    _index: dict[tuple[str, str], dict[Capability, str]] = field(default_factory=dict)

    def add(self, pool: str, address: str, capability: Capability, server: InferenceServer) -> None:
        self._index.setdefault((pool, address), {})[capability] = server.id
        self.servers[server.id] = server

    def find(self, pool: str, address: str, capability: Capability) -> str | None:
        """Id of the server serving ``capability`` at ``address``, if any."""
        return self._index.get((pool, address), {}).get(capability)


class ServerPoolSynthesizer:
    """Build the inference server pool from address lists."""

    def __init__(
        self,
        type_a_capabilities: Sequence[Capability] = TYPE_A_CAPABILITIES,
        specialized_capability: Capability = SPECIALIZED_CAPABILITY,
        endpoint_aliases: Mapping[Capability, Capability] | None = None,
        id_factory: IdFactory = new_id_suffix,
    ):
        self.type_a_capabilities = list(type_a_capabilities)
        self.specialized_capability = specialized_capability
        self.endpoint_aliases = dict(
            DEFAULT_ENDPOINT_ALIASES if endpoint_aliases is None else endpoint_aliases
        )
        self.id_factory = id_factory

    def endpoint_url(self, address: str, capability: Capability) -> str:
        """Endpoint of ``capability`` at ``address``, honoring path aliases."""
        path = self.endpoint_aliases.get(capability, capability)
        return f"http://{address}/{path.value}"

    def _server(
        self, address: str, capability: Capability, ordinal: int, timestamp: datetime
    ) -> InferenceServer:
        return InferenceServer(
            id=server_id(capability.value, self.id_factory),
            name=f"{capability.value}{ordinal}",
            url=self.endpoint_url(address, capability),
            model_type=capability.value,
            enabled=True,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def synthesize(
        self,
        type_a_addresses: Sequence[str],
        type_b_addresses: Sequence[str],
        timestamp: datetime | None = None,
    ) -> ServerPool:
        """Create the server pool.

        Args:
            type_a_addresses: Addresses serving the general capabilities
            type_b_addresses: Addresses serving the specialized capability
            timestamp: Creation time stamped on every record

        Returns:
            ServerPool: Servers indexed for allocation
        """
        timestamp = timestamp or utc_now()
        pool = ServerPool(
            addresses={
                TYPE_A_POOL: list(type_a_addresses),
                TYPE_B_POOL: list(type_b_addresses),
            }
        )

        for ordinal, address in enumerate(type_a_addresses, start=1):
            for capability in self.type_a_capabilities:
                pool.add(
                    TYPE_A_POOL,
                    address,
                    capability,
                    self._server(address, capability, ordinal, timestamp),
                )

        for ordinal, address in enumerate(type_b_addresses, start=1):
            pool.add(
                TYPE_B_POOL,
                address,
                self.specialized_capability,
                self._server(address, self.specialized_capability, ordinal, timestamp),
            )

        if not type_a_addresses:
            logger.warning("Type-A server pool is empty", pool=TYPE_A_POOL)
        if not type_b_addresses:
            logger.warning("Type-B server pool is empty", pool=TYPE_B_POOL)

        logger.info(
            "Server pool synthesized",
            servers=len(pool.servers),
            type_a_addresses=len(type_a_addresses),
            type_b_addresses=len(type_b_addresses),
        )
        return pool
