"""texte - a minimal terminal text editor."""

import logging

from .buffer import Buffer
from .coordinator import Coordinator, Direction, Intent
from .geometry import Position, Size
from .line import Line

# The editor owns the screen; log records go nowhere unless the CLI asks
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Buffer',
    'Coordinator',
    'Direction',
    'Intent',
    'Line',
    'Position',
    'Size',
]
