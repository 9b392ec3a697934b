"""tokenslim: compact, cache-backed re-encoding of LLM conversation content."""

from tokenslim.version import __version__

__all__ = ["__version__"]
