"""WakaTime summaries source: fetch, compound and emit usage records."""

__version__ = "0.3.0"
__all__ = ["__version__"]
