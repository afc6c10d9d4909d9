"""ConfigHub: community directory of emulator configuration profiles."""

__version__ = "0.1.0"
