"""embed-sync - keep documentation code blocks in sync with source declarations."""

__version__ = "0.1.0"
