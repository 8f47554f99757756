"""Camera inventory reading and adaptation.

The inventory is a workbook maintained by hand: one row per camera, a
header row, and a free-text column listing the detection models each
camera needs. ``InventoryAdapter`` turns those rows into the capability
requirements the binding allocator consumes.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.exceptions import InventoryLoadError
from ..core.logging import get_logger
from ..models.capability import DEFAULT_CAPABILITIES, Capability
from .capability_normalizer import CapabilityNormalizer

logger = get_logger(__name__)

# Zero-based inventory columns
DEVICE_NAME_COLUMN = 7
STREAM_ADDRESS_COLUMN = 10
CAPABILITIES_COLUMN = 11
MIN_ROW_FIELDS = 12

DEFAULT_LABEL_DELIMITER = "、"


@dataclass
class CameraInventoryEntry:
    """Capability requirements of one inventory camera."""

    device_name: str
    stream_address: str
    capabilities: list[Capability] = field(default_factory=list)
    row_index: int | None = None


@dataclass
class InventoryReport:
    """Outcome of adapting an inventory sheet."""

    entries: list[CameraInventoryEntry] = field(default_factory=list)
    skipped_rows: list[int] = field(default_factory=list)
    excluded_devices: list[str] = field(default_factory=list)


def _cell_text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def read_inventory_rows(path: Path | str) -> list[list[str]]:
    """Read the first sheet of an inventory workbook as rows of strings.

    Trailing empty cells are dropped from every row, so a row's length is
    its populated width.

    Args:
        path: Workbook path

    Returns:
        Rows in sheet order, header included

    Raises:
        InventoryLoadError: If the workbook is missing or unreadable
    """
    path = Path(path)
    try:
        frame = pd.read_excel(
            path,
            sheet_name=0,
            header=None,
            dtype=str,
            keep_default_na=False,
            engine="openpyxl",
        )
    except FileNotFoundError as e:
        raise InventoryLoadError(
            f"Inventory file not found: {path}", path=path, cause=e
        ) from e
    except Exception as e:
        raise InventoryLoadError(
            f"Failed to read inventory file: {e}", path=path, cause=e
        ) from e

    rows = []
    for raw_row in frame.itertuples(index=False, name=None):
        row = [_cell_text(value) for value in raw_row]
        while row and not row[-1].strip():
            row.pop()
        rows.append(row)

    logger.debug("Inventory rows read", path=str(path), rows=len(rows))
    return rows


class InventoryAdapter:
    """Convert inventory rows into camera capability requirements.

    Every camera receives the default capabilities in addition to the ones
    its row names; each capability appears at most once, in the order it
    was first seen.
    """

    def __init__(
        self,
        normalizer: CapabilityNormalizer | None = None,
        default_capabilities: Sequence[Capability] = DEFAULT_CAPABILITIES,
        label_delimiter: str = DEFAULT_LABEL_DELIMITER,
    ):
        self.normalizer = normalizer or CapabilityNormalizer()
        self.default_capabilities = list(default_capabilities)
        self.label_delimiter = label_delimiter

    def parse_capabilities(self, labels: str) -> list[Capability]:
        """Normalize a delimited label cell and append the defaults."""
        capabilities: list[Capability] = []
        for label in labels.split(self.label_delimiter):
            capability = self.normalizer.normalize(label)
            if capability is not None and capability not in capabilities:
                capabilities.append(capability)

        for capability in self.default_capabilities:
            if capability not in capabilities:
                capabilities.append(capability)
        return capabilities

    def parse_row(self, row: Sequence[str], row_index: int) -> CameraInventoryEntry | None:
        """Build an entry from one data row, or ``None`` if the row is malformed."""
        if len(row) < MIN_ROW_FIELDS:
            logger.debug(
                "Skipping inventory row with too few fields",
                row_index=row_index,
                fields=len(row),
            )
            return None

        device_name = _cell_text(row[DEVICE_NAME_COLUMN]).strip()
        stream_address = _cell_text(row[STREAM_ADDRESS_COLUMN]).strip()
        if not device_name or not stream_address:
            logger.warning(
                "Skipping inventory row without device name or stream address",
                row_index=row_index,
                device_name=device_name,
            )
            return None

        return CameraInventoryEntry(
            device_name=device_name,
            stream_address=stream_address,
            capabilities=self.parse_capabilities(_cell_text(row[CAPABILITIES_COLUMN])),
            row_index=row_index,
        )

    def adapt(
        self,
        rows: Iterable[Sequence[str]],
        excluded_device_names: Iterable[str] = (),
    ) -> InventoryReport:
        """Adapt inventory rows, header first.

        Args:
            rows: Sheet rows including the header row
            excluded_device_names: Devices dropped from the result

        Returns:
            InventoryReport: Entries in sheet order plus skip bookkeeping
        """
        excluded = {name.strip() for name in excluded_device_names}
        report = InventoryReport()

        for position, row in enumerate(rows):
            if position == 0:
                continue
            row_index = position + 1

            entry = self.parse_row(row, row_index)
            if entry is None:
                report.skipped_rows.append(row_index)
                continue

            if entry.device_name in excluded:
                logger.debug(
                    "Excluding device", device_name=entry.device_name, row_index=row_index
                )
                report.excluded_devices.append(entry.device_name)
                continue

            report.entries.append(entry)

        logger.info(
            "Inventory adapted",
            cameras=len(report.entries),
            skipped_rows=len(report.skipped_rows),
            excluded=len(report.excluded_devices),
        )
        return report
