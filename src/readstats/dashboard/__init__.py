"""Reading statistics dashboard: pipeline, scheduling and export."""

from .engine import DashboardResult, compute_dashboard
from .export import JSONExportResult, export_to_file, export_to_string
from .scheduler import DashboardScheduler, DashboardState

__all__ = [
    "DashboardResult",
    "compute_dashboard",
    "JSONExportResult",
    "export_to_file",
    "export_to_string",
    "DashboardScheduler",
    "DashboardState",
]
