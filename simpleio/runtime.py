"""Library start-up and shut-down."""

from __future__ import annotations

# Request raw-socket support during initialisation. The Python socket layer
# prepares the platform networking stack itself, so nothing extra is needed.
INIT_RAW_SOCKETS = 1

_active_configuration = 0


def initialize(conf: int = 0) -> int:
    """Initialise the library with the given option bits and return them."""
    global _active_configuration
    if isinstance(conf, bool) or not isinstance(conf, int):
        raise TypeError("conf must be an integer of option bits")
    _active_configuration = conf
    return _active_configuration


def cleanup() -> None:
    """Release library-wide state set up by initialize()."""
    global _active_configuration
    _active_configuration = 0