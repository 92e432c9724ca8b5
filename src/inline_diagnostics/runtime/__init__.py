"""Runtime services shared by the mode and its adapters."""

from . import telemetry

__all__ = ["telemetry"]
