"""Serial port tools: send a file, capture incoming bytes, and run a loopback test."""

__version__ = "1.0.0"
__all__ = ["__version__"]