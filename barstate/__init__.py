"""State models, update events and helpers for desktop status bar services."""

__version__ = "0.1.0"

__all__ = ["launcher", "network", "nm_types", "privacy", "tray", "upower", "utils"]