"""Coach AI: AI personal trainer backend, client helpers and CLI."""

__version__ = "0.1.0"
