"""Tiling window layout engine and system information components for a status line."""

__version__ = "1.0.0"