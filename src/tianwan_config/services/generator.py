"""End-to-end generation of the Tianwan configuration.

Runs one batch: read the inventory, synthesize the server pool, bind
every camera capability round-robin, assemble the document and write it.
Nothing is written unless every step succeeds.
"""

import json
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..core.config import GeneratorConfig
from ..core.exceptions import OutputWriteError
from ..core.logging import get_logger, log_execution_time
from ..models.datastore import DataStore, utc_now
from .allocator import BindingAllocator, SkippedBinding, create_cursors
from .assembler import ConfigAssembler
from .capability_normalizer import CapabilityNormalizer
from .identifiers import IdFactory, new_id_suffix
from .inventory import InventoryAdapter, read_inventory_rows
from .server_pool import ServerPoolSynthesizer

logger = get_logger(__name__)

RowsLoader = Callable[[Path], list[list[str]]]


@dataclass
class GenerationSummary:
    """Counts reported after a run."""

    cameras: int = 0
    servers: int = 0
    bindings: int = 0
    skipped_rows: list[int] = field(default_factory=list)
    excluded_devices: list[str] = field(default_factory=list)
    skipped_bindings: list[SkippedBinding] = field(default_factory=list)


@dataclass
class GenerationResult:
    datastore: DataStore
    summary: GenerationSummary


class ConfigGenerator:
    """Generate a ``DataStore`` from a ``GeneratorConfig``."""

    def __init__(
        self,
        config: GeneratorConfig,
        id_factory: IdFactory = new_id_suffix,
        clock: Callable[[], datetime] = utc_now,
        rows_loader: RowsLoader = read_inventory_rows,
    ):
        """Initialize the pipeline components from configuration.

        Args:
            config: Validated generator configuration
            id_factory: Source of identifier suffixes
            clock: Source of the run timestamp
            rows_loader: Reads inventory rows from the workbook path
        """
        self.config = config
        self.clock = clock
        self.rows_loader = rows_loader

        self.adapter = InventoryAdapter(
            normalizer=CapabilityNormalizer(config.capability_vocabulary),
            default_capabilities=config.default_capabilities,
            label_delimiter=config.label_delimiter,
        )
        self.synthesizer = ServerPoolSynthesizer(
            type_a_capabilities=config.type_a_capabilities,
            specialized_capability=config.specialized_capability,
            endpoint_aliases=config.endpoint_aliases,
            id_factory=id_factory,
        )
        self.assembler = ConfigAssembler(id_factory=id_factory)

    @log_execution_time(logger, "Configuration generation")
    def generate(self) -> GenerationResult:
        """Build the configuration document.

        Raises:
            InventoryLoadError: If the inventory cannot be read
            AllocationError: If a required server pool is empty
        """
        config = self.config
        timestamp = self.clock()
        summary = GenerationSummary()

        rows = self.rows_loader(config.inventory_file_path)
        report = self.adapter.adapt(rows, config.excluded_device_names)
        summary.skipped_rows = report.skipped_rows
        summary.excluded_devices = report.excluded_devices

        pool = self.synthesizer.synthesize(
            config.server_pool_a, config.server_pool_b, timestamp=timestamp
        )
        allocator = BindingAllocator(
            pool,
            specialized_capability=config.specialized_capability,
            threshold=config.default_threshold,
            max_threshold=config.default_max_threshold,
        )
        cursors = create_cursors(pool)

        cameras = []
        for entry in report.entries:
            allocation = allocator.allocate(entry.device_name, entry.capabilities, cursors)
            summary.bindings += len(allocation.bindings)
            summary.skipped_bindings.extend(allocation.skipped)
            cameras.append(
                self.assembler.camera_record(entry, allocation.bindings, timestamp)
            )

        datastore = self.assembler.assemble(
            cameras, pool.servers, config.alert_server_url, timestamp
        )
        summary.cameras = len(datastore.cameras)
        summary.servers = len(datastore.inference_servers)

        if summary.skipped_bindings:
            logger.error(
                "Some capabilities were left unbound",
                skipped_bindings=len(summary.skipped_bindings),
            )
        logger.info(
            "Configuration generated",
            cameras=summary.cameras,
            servers=summary.servers,
            bindings=summary.bindings,
        )
        return GenerationResult(datastore=datastore, summary=summary)


def write_datastore(datastore: DataStore, output_path: Path | str) -> Path:
    """Write the document as indented UTF-8 JSON, replacing ``output_path`` atomically.

    Raises:
        OutputWriteError: If serialization or the write fails; no partial
            file is left behind
    """
    output_path = Path(output_path)
    try:
        payload = json.dumps(datastore.to_document(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise OutputWriteError(
            f"Failed to serialize configuration: {e}", path=output_path, cause=e
        ) from e

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.write("\n")
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output_path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(
            f"Failed to write configuration: {e}", path=output_path, cause=e
        ) from e

    logger.info("Configuration written", path=str(output_path), bytes=len(payload))
    return output_path
