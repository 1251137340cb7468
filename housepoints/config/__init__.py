# housepoints/config/__init__.py
from __future__ import annotations

from .settings import Settings, ensure_timezone

__all__ = ["Settings", "ensure_timezone"]
