"""archmodel — software architecture model graph engine."""

__version__ = "0.1.0"
