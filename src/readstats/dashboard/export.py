"""JSON export of a computed dashboard."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .engine import DashboardResult


@dataclass
class JSONExportResult:
    """Result of a JSON export operation."""

    success: bool
    file_path: Optional[Path] = None
    error: Optional[str] = None


def export_to_string(result: DashboardResult, pretty: bool = True) -> str:
    """Serialize a dashboard result to JSON text."""
    return json.dumps(result.to_dict(), indent=2 if pretty else None, ensure_ascii=False)


def export_to_file(
    result: DashboardResult,
    output_path: Path,
    pretty: bool = True,
) -> JSONExportResult:
    """Write a dashboard result to a JSON file.

    Args:
        result: Computed dashboard
        output_path: Path for output file
        pretty: Pretty-print JSON output

    Returns:
        JSONExportResult with success status
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(export_to_string(result, pretty=pretty))
    except OSError as e:
        return JSONExportResult(success=False, error=str(e))

    return JSONExportResult(success=True, file_path=output_path)
