"""Inline diagnostics: show checker messages beneath the line they refer to."""

__all__ = [
    "adapters",
    "annotation",
    "config",
    "context",
    "formatter",
    "host",
    "mode",
    "policy",
    "registry",
    "renderer",
    "runtime",
    "severity",
]

__version__ = "0.1.0"
