"""Pytest configuration and shared fixtures.

Provides deterministic identifier/clock sources, inventory rows and
on-disk workbooks and configuration files.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from tianwan_config.core.config import GeneratorConfig

from .helpers import FIXED_TIME, HEADER, counter_id_factory, make_row, write_workbook


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic 32-hex-digit identifier suffixes."""
    return counter_id_factory()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_TIME


@pytest.fixture
def inventory_rows() -> list[list[str]]:
    """A header and four cameras, one of them excluded by ``generator_config``."""
    return [
        HEADER,
        make_row("东门入口", "rtsp://10.0.0.11/stream1", "安全帽、吸烟"),
        make_row("配电房", "rtsp://10.0.0.12/stream1", "安全带、火焰、未知算法"),
        make_row("仓库", "rtsp://10.0.0.13/stream1", ""),
        make_row("测试相机", "rtsp://10.0.0.14/stream1", "积水"),
    ]


@pytest.fixture
def generator_config() -> GeneratorConfig:
    return GeneratorConfig(
        server_pool_a=["10.1.0.1:8000", "10.1.0.2:8000"],
        server_pool_b=["10.2.0.1:8000"],
        alert_server_url="http://10.3.0.1:9000/alerts",
        inventory_file_path=Path("inventory.xlsx"),
        excluded_device_names=["测试相机"],
    )


@pytest.fixture
def inventory_file(tmp_path: Path, inventory_rows: list[list[str]]) -> Path:
    return write_workbook(tmp_path / "cameras.xlsx", inventory_rows)


@pytest.fixture
def config_file(tmp_path: Path, inventory_file: Path) -> Path:
    """Generator YAML using the key names of existing deployments."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "tianwan1": ["10.1.0.1:8000", "10.1.0.2:8000"],
                "tianwan2": ["10.2.0.1:8000"],
                "alert_server": "http://10.3.0.1:9000/alerts",
                "excel_path": str(inventory_file),
                "filter_map": ["测试相机"],
            },
            allow_unicode=True,
        ),
        encoding="utf-8",
    )
    return path
