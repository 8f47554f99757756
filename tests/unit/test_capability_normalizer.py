"""Unit tests for capability label normalization."""

import pytest

from tianwan_config.models.capability import DEFAULT_VOCABULARY, Capability
from tianwan_config.services.capability_normalizer import CapabilityNormalizer


class TestCapabilityNormalizer:
    """Test CapabilityNormalizer functionality."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("安全帽", Capability.HELMET),
            ("老鼠", Capability.MOUSE),
            ("短袖", Capability.TSHIRT),
            ("积水", Capability.PONDING),
            ("倒地", Capability.FALL),
            ("安全带", Capability.SAFETY_BELT),
            ("吸烟", Capability.CIGAR),
            ("手势", Capability.GESTURE),
            ("烟雾", Capability.SMOKE),
            ("火焰", Capability.FIRE),
        ],
    )
    def test_inventory_labels(self, label, expected):
        assert CapabilityNormalizer().normalize(label) == expected

    def test_vocabulary_covers_every_capability(self):
        assert set(DEFAULT_VOCABULARY.values()) == set(Capability)

    def test_fire_and_smoke_stay_distinct(self):
        """Fire shares the smoke endpoint, not the smoke capability."""
        normalizer = CapabilityNormalizer()

        assert normalizer.normalize("火焰") == Capability.FIRE
        assert normalizer.normalize("烟雾") == Capability.SMOKE

    def test_canonical_identifiers_accepted(self):
        normalizer = CapabilityNormalizer()

        assert normalizer.normalize("helmet") == Capability.HELMET
        assert normalizer.normalize("SafetyBelt") == Capability.SAFETY_BELT

    def test_surrounding_whitespace_ignored(self):
        assert CapabilityNormalizer().normalize("  安全帽 ") == Capability.HELMET

    @pytest.mark.parametrize("label", ["", "   ", "未知算法", "helmet detection"])
    def test_unrecognized_labels(self, label):
        assert CapabilityNormalizer().normalize(label) is None

    def test_extra_vocabulary(self):
        normalizer = CapabilityNormalizer({"安全帽佩戴": Capability.HELMET, "抽烟": "cigar"})

        assert normalizer.normalize("安全帽佩戴") == Capability.HELMET
        assert normalizer.normalize("抽烟") == Capability.CIGAR
        assert normalizer.normalize("安全帽") == Capability.HELMET

    def test_extra_vocabulary_overrides_builtin(self):
        normalizer = CapabilityNormalizer({"烟雾": Capability.FIRE})

        assert normalizer.normalize("烟雾") == Capability.FIRE
