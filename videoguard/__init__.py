"""Window-title monitor that closes the browser on blacklisted content and enforces breaks."""

__version__ = "0.1.0"
__all__ = ["__version__"]