"""Runtime services (telemetry) shared by every engine component."""

from . import telemetry

__all__ = ["telemetry"]
