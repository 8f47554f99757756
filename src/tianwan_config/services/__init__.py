"""Generation services for Tianwan Config."""

from .allocator import AllocationCursor, BindingAllocator, create_cursors
from .assembler import ConfigAssembler
from .capability_normalizer import CapabilityNormalizer
from .generator import ConfigGenerator, GenerationResult, write_datastore
from .inventory import CameraInventoryEntry, InventoryAdapter, read_inventory_rows
from .server_pool import ServerPool, ServerPoolSynthesizer

__all__ = [
    "AllocationCursor",
    "BindingAllocator",
    "create_cursors",
    "ConfigAssembler",
    "CapabilityNormalizer",
    "ConfigGenerator",
    "GenerationResult",
    "write_datastore",
    "CameraInventoryEntry",
    "InventoryAdapter",
    "read_inventory_rows",
    "ServerPool",
    "ServerPoolSynthesizer",
]
