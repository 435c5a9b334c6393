"""orgcheck - missed and upcoming task alerts for Org files."""

__version__ = "0.1.0"
