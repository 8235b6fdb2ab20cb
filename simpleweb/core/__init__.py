"""Core building blocks shared by every SimpleWeb layer."""

from simpleweb._version import __version__


__all__ = ["__version__"]
