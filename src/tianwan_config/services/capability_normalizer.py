"""Maps hand-entered inventory labels to canonical capabilities."""

from collections.abc import Mapping

from ..core.logging import get_logger
from ..models.capability import DEFAULT_VOCABULARY, Capability

logger = get_logger(__name__)


class CapabilityNormalizer:
    """Resolve free-text model labels against a closed vocabulary.

    Canonical identifiers ("helmet", "FIRE") are always accepted as labels.
    Unknown labels resolve to ``None`` and callers skip them.
    """

    def __init__(self, vocabulary: Mapping[str, Capability] | None = None):
        """Initialize the vocabulary table.

        Args:
            vocabulary: Extra labels, merged over the built-in vocabulary
        """
        self.vocabulary: dict[str, Capability] = {
            capability.value: capability for capability in Capability
        }
        self.vocabulary.update(DEFAULT_VOCABULARY)
        for label, capability in (vocabulary or {}).items():
            self.vocabulary[label.strip()] = Capability(capability)

    def normalize(self, label: str) -> Capability | None:
        """Return the capability for ``label``, or ``None`` if unrecognized."""
        label = label.strip()
        if not label:
            return None

        capability = self.vocabulary.get(label) or self.vocabulary.get(label.lower())
        if capability is None:
            logger.debug("Unrecognized capability label dropped", label=label)
        return capability
