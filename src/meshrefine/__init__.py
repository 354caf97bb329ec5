# -*- coding: utf-8 -*-
"""Triangle mesh storage and linear subdivision."""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("meshrefine")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
