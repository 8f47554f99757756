"""Round-robin binding of camera capabilities to inference servers.

Each address pool has its own cursor. A binding drawn from a pool takes
the address under the cursor and moves the cursor one step, so
consecutive bindings of the same pool are spread evenly across its
addresses regardless of which camera asked for them.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.exceptions import AllocationError
from ..core.logging import get_logger
from ..models.capability import SPECIALIZED_CAPABILITY, Capability
from ..models.datastore import InferenceServerBinding
from .server_pool import TYPE_A_POOL, TYPE_B_POOL, ServerPool

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 0.5
UNBOUNDED_MAX_THRESHOLD = 0.0


@dataclass
class AllocationCursor:
    """Round-robin position within one address pool."""

    pool: str
    addresses: tuple[str, ...]
    position: int = 0

    def take(self) -> str:
        """Return the address under the cursor and advance past it."""
        if not self.addresses:
            raise AllocationError(
                f"Server pool '{self.pool}' has no addresses", pool=self.pool
            )
        address = self.addresses[self.position]
        self.position = (self.position + 1) % len(self.addresses)
        return address


@dataclass
class SkippedBinding:
    """A required capability with no server at the chosen address."""

    device_name: str
    capability: Capability
    pool: str
    address: str


@dataclass
class AllocationResult:
    bindings: list[InferenceServerBinding] = field(default_factory=list)
    skipped: list[SkippedBinding] = field(default_factory=list)


def create_cursors(pool: ServerPool) -> dict[str, AllocationCursor]:
    """Fresh cursors, one per address pool, all at position zero."""
    return {
        name: AllocationCursor(pool=name, addresses=tuple(addresses))
        for name, addresses in pool.addresses.items()
    }


class BindingAllocator:
    """Assign camera capabilities to servers of the synthesized pool."""

    def __init__(
        self,
        pool: ServerPool,
        specialized_capability: Capability = SPECIALIZED_CAPABILITY,
        threshold: float = DEFAULT_THRESHOLD,
        max_threshold: float = UNBOUNDED_MAX_THRESHOLD,
    ):
        self.pool = pool
        self.specialized_capability = specialized_capability
        self.threshold = threshold
        self.max_threshold = max_threshold

    def pool_for(self, capability: Capability) -> str:
        """Name of the address pool that serves ``capability``."""
        if capability == self.specialized_capability:
            return TYPE_B_POOL
        return TYPE_A_POOL

    def allocate(
        self,
        device_name: str,
        capabilities: Sequence[Capability],
        cursors: dict[str, AllocationCursor],
    ) -> AllocationResult:
        """Bind each capability of one camera, in order.

        Args:
            device_name: Camera the capabilities belong to
            capabilities: Required capabilities in requirement order
            cursors: Per-pool cursors, advanced in place

        Returns:
            AllocationResult: Bindings plus any capability left unbound

        Raises:
            AllocationError: If a required pool has no addresses
        """
        result = AllocationResult()

        for capability in capabilities:
            pool_name = self.pool_for(capability)
            cursor = cursors[pool_name]
            if not cursor.addresses:
                raise AllocationError(
                    f"No '{pool_name}' server address available for "
                    f"capability '{capability.value}'",
                    pool=pool_name,
                    capability=capability.value,
                    device_name=device_name,
                )

            address = cursor.take()
            server_id = self.pool.find(pool_name, address, capability)
            if server_id is None:
                logger.error(
                    "No server serves capability at allocated address, binding skipped",
                    device_name=device_name,
                    capability=capability.value,
                    pool=pool_name,
                    address=address,
                )
                result.skipped.append(
                    SkippedBinding(
                        device_name=device_name,
                        capability=capability,
                        pool=pool_name,
                        address=address,
                    )
                )
                continue

            result.bindings.append(
                InferenceServerBinding(
                    server_id=server_id,
                    threshold=self.threshold,
                    max_threshold=self.max_threshold,
                )
            )

        return result
