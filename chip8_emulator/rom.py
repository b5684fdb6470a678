"""
CHIP-8 Emulator — ROM File Reader

ROM images are raw bytes: no header, no length prefix. This module only
turns a path into bytes; size checking happens when the emulator loads
them (Memory.load_rom raises RomTooLarge).
"""

import logging
from pathlib import Path

from .errors import RomReadError


logger = logging.getLogger(__name__)


def read_rom(path) -> bytes:
    """Read a ROM file. Raises RomReadError on any filesystem error."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise RomReadError(path, e.strerror or str(e)) from e
    logger.debug("Read %d bytes from %s", len(data), path)
    return data
