"""Shared test helpers for building inventories."""

import itertools
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd

HEADER = [
    "序号", "区域", "楼栋", "楼层", "位置", "品牌", "型号",
    "设备名称", "IP地址", "端口", "取流地址", "算法",
]

FIXED_TIME = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)


def make_row(device_name: str, stream_address: str, labels: str = "") -> list[str]:
    """Inventory row with the device, stream and label columns filled."""
    row = [""] * 12
    row[0] = "1"
    row[7] = device_name
    row[10] = stream_address
    row[11] = labels
    return row


def counter_id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{next(counter):032x}"


def write_workbook(path: Path, rows: list[list[str]]) -> Path:
    width = max(len(row) for row in rows)
    padded = [row + [None] * (width - len(row)) for row in rows]
    pd.DataFrame(padded).to_excel(path, header=False, index=False, engine="openpyxl")
    return path
