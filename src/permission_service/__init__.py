"""Per-file, per-user permission authority."""

__version__ = "0.1.0"
