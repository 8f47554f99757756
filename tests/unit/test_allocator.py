"""Unit tests for round-robin binding allocation."""

import pytest

from tianwan_config.core.exceptions import AllocationError
from tianwan_config.models.capability import Capability
from tianwan_config.services.allocator import (
    AllocationCursor,
    BindingAllocator,
    create_cursors,
)
from tianwan_config.services.server_pool import (
    TYPE_A_POOL,
    TYPE_B_POOL,
    ServerPoolSynthesizer,
)


def address_of(pool, server_id: str) -> str:
    """Address part of a server's endpoint URL."""
    return pool.servers[server_id].url.removeprefix("http://").split("/", 1)[0]


class TestAllocationCursor:
    """Test AllocationCursor functionality."""

    def test_wraps_modulo_pool_size(self):
        cursor = AllocationCursor(pool=TYPE_A_POOL, addresses=("a", "b", "c"))

        assert [cursor.take() for _ in range(7)] == ["a", "b", "c", "a", "b", "c", "a"]
        assert cursor.position == 1

    def test_single_address(self):
        cursor = AllocationCursor(pool=TYPE_B_POOL, addresses=("only",))

        assert [cursor.take() for _ in range(3)] == ["only"] * 3
        assert cursor.position == 0

    def test_empty_pool_raises(self):
        cursor = AllocationCursor(pool=TYPE_B_POOL, addresses=())

        with pytest.raises(AllocationError) as exc_info:
            cursor.take()

        assert exc_info.value.details["pool"] == TYPE_B_POOL

    def test_create_cursors_start_at_zero(self):
        pool = ServerPoolSynthesizer().synthesize(["a1", "a2"], ["b1"])

        cursors = create_cursors(pool)

        assert cursors[TYPE_A_POOL].addresses == ("a1", "a2")
        assert cursors[TYPE_B_POOL].addresses == ("b1",)
        assert all(cursor.position == 0 for cursor in cursors.values())


class TestBindingAllocator:
    """Test BindingAllocator functionality."""

    @pytest.fixture
    def pool(self):
        return ServerPoolSynthesizer().synthesize(["a1", "a2", "a3"], ["b1", "b2"])

    def test_one_binding_per_capability(self, pool):
        capabilities = [Capability.HELMET, Capability.SAFETY_BELT, Capability.FIRE]

        result = BindingAllocator(pool).allocate("cam", capabilities, create_cursors(pool))

        assert len(result.bindings) == len(capabilities)
        assert result.skipped == []
        for binding, capability in zip(result.bindings, capabilities):
            assert pool.servers[binding.server_id].model_type == capability.value

    def test_default_thresholds(self, pool):
        result = BindingAllocator(pool).allocate(
            "cam", [Capability.HELMET], create_cursors(pool)
        )

        assert result.bindings[0].threshold == 0.5
        assert result.bindings[0].max_threshold == 0.0

    def test_custom_thresholds(self, pool):
        allocator = BindingAllocator(pool, threshold=0.7, max_threshold=0.95)

        result = allocator.allocate("cam", [Capability.HELMET], create_cursors(pool))

        assert result.bindings[0].threshold == 0.7
        assert result.bindings[0].max_threshold == 0.95

    def test_specialized_capability_uses_type_b_pool(self, pool):
        allocator = BindingAllocator(pool)

        assert allocator.pool_for(Capability.SAFETY_BELT) == TYPE_B_POOL
        assert allocator.pool_for(Capability.HELMET) == TYPE_A_POOL
        assert allocator.pool_for(Capability.FIRE) == TYPE_A_POOL

    def test_round_robin_per_request(self, pool):
        """The i-th helmet request lands on address i mod N."""
        allocator = BindingAllocator(pool)
        cursors = create_cursors(pool)
        addresses = ["a1", "a2", "a3"]

        bound = [
            address_of(pool, allocator.allocate(f"cam-{i}", [Capability.HELMET], cursors).bindings[0].server_id)
            for i in range(7)
        ]

        assert bound == [addresses[i % 3] for i in range(7)]

    def test_cursor_advances_across_capabilities(self, pool):
        """Consecutive type-A draws walk the pool regardless of capability."""
        cursors = create_cursors(pool)
        capabilities = [Capability.HELMET, Capability.CIGAR, Capability.GESTURE, Capability.SMOKE]

        result = BindingAllocator(pool).allocate("cam", capabilities, cursors)

        assert [address_of(pool, b.server_id) for b in result.bindings] == ["a1", "a2", "a3", "a1"]
        assert cursors[TYPE_A_POOL].position == 1
        assert cursors[TYPE_B_POOL].position == 0

    def test_pools_advance_independently(self, pool):
        cursors = create_cursors(pool)
        capabilities = [
            Capability.SAFETY_BELT,
            Capability.HELMET,
            Capability.SAFETY_BELT,
            Capability.HELMET,
            Capability.SAFETY_BELT,
        ]

        result = BindingAllocator(pool).allocate("cam", capabilities, cursors)

        assert [address_of(pool, b.server_id) for b in result.bindings] == [
            "b1", "a1", "b2", "a2", "b1",
        ]

    def test_empty_required_pool_is_fatal(self):
        pool = ServerPoolSynthesizer().synthesize(["a1"], [])

        with pytest.raises(AllocationError) as exc_info:
            BindingAllocator(pool).allocate(
                "配电房", [Capability.HELMET, Capability.SAFETY_BELT], create_cursors(pool)
            )

        assert exc_info.value.details == {
            "pool": TYPE_B_POOL,
            "capability": "safetybelt",
            "device_name": "配电房",
        }

    def test_empty_unused_pool_is_fine(self):
        pool = ServerPoolSynthesizer().synthesize(["a1"], [])

        result = BindingAllocator(pool).allocate(
            "cam", [Capability.HELMET], create_cursors(pool)
        )

        assert len(result.bindings) == 1

    def test_missing_server_skips_binding(self):
        pool = ServerPoolSynthesizer(type_a_capabilities=[Capability.SMOKE]).synthesize(
            ["a1", "a2"], []
        )
        cursors = create_cursors(pool)

        result = BindingAllocator(pool).allocate(
            "cam", [Capability.HELMET, Capability.SMOKE], cursors
        )

        assert len(result.bindings) == 1
        assert address_of(pool, result.bindings[0].server_id) == "a2"
        assert len(result.skipped) == 1
        skipped = result.skipped[0]
        assert skipped.device_name == "cam"
        assert skipped.capability == Capability.HELMET
        assert skipped.pool == TYPE_A_POOL
        assert skipped.address == "a1"
        assert cursors[TYPE_A_POOL].position == 0
