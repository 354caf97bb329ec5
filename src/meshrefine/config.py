"""Package-wide constants.

``EPSILON`` is the coincidence tolerance used by the mesh checks.
``LOG_LEVEL`` is the default level applied by
:func:`meshrefine.logging_config.setup_logging`; it may be overridden
with the ``MESHREFINE_LOG_LEVEL`` environment variable.
"""

import logging
import os


def _level_from_env(name: str, default: int) -> int:
    value = getattr(logging, os.environ.get(name, "").strip().upper(), None)
    if isinstance(value, int):
        return value
    return default


EPSILON: float = 0.000005

LOG_LEVEL: int = _level_from_env("MESHREFINE_LOG_LEVEL", logging.WARNING)
