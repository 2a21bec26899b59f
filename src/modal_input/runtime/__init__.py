"""Runtime services shared by the modal input core."""

from . import telemetry

__all__ = ["telemetry"]
