"""Identifier generation for cameras and inference servers."""

import uuid
from collections.abc import Callable

IdFactory = Callable[[], str]


def new_id_suffix() -> str:
    """128-bit random suffix, hex without separators."""
    return uuid.uuid4().hex


def server_id(capability: str, id_factory: IdFactory = new_id_suffix) -> str:
    return f"inf_{capability}_{id_factory()}"


def camera_id(id_factory: IdFactory = new_id_suffix) -> str:
    return f"cam_{id_factory()}"
