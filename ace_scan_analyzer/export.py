"""
CSV export of the most scanned target files.
"""

import csv
import json
from typing import Optional

from . import config
from .exceptions import ExportError
from .logging_config import get_logger
from .records import AggregateStatistics, file_extension
from .report import risk_tier

logger = get_logger(__name__)

CSV_HEADER = ["Rank", "Frequency", "File Path", "Risk Level", "File Type", "Full Path"]


def export_high_risk_targets(
    stats: AggregateStatistics,
    output_path: Optional[str] = None,
    limit: int = config.EXPORT_ROW_LIMIT,
) -> str:
    """
    Write the top scanned files to a CSV that Excel/WPS open correctly.

    Rows are ordered by scan count, highest first, and capped at ``limit``.
    The file starts with a UTF-8 byte-order mark.

    Args:
        stats: Completed statistics of a run.
        output_path: Destination file (default: config.DEFAULT_EXPORT_PATH).
        limit: Maximum number of rows.

    Returns:
        The path written.

    Raises:
        ExportError: If the file cannot be written.
    """
    output_path = output_path or config.DEFAULT_EXPORT_PATH
    rows = stats.top_files(limit)

    try:
        with open(output_path, "w", encoding=config.EXPORT_ENCODING, newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            for rank, (path, count) in enumerate(rows, 1):
                writer.writerow(
                    [
                        rank,
                        count,
                        path,
                        risk_tier(count, config.FILE_RISK_THRESHOLDS),
                        file_extension(path),
                        path,
                    ]
                )
    except OSError as e:
        raise ExportError(f"Cannot write CSV export: {e}", output_path=output_path) from e

    logger.info("\nExported %d most scanned targets: %s", len(rows), output_path)
    logger.info("  (UTF-8 with BOM, opens directly in Excel/WPS)")
    return output_path


def export_statistics_json(stats: AggregateStatistics, output_path: str) -> str:
    """
    Write the raw statistics of a run as JSON.

    Raises:
        ExportError: If the file cannot be written.
    """
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(stats.to_dict(), f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise ExportError(f"Cannot write JSON statistics: {e}", output_path=output_path) from e

    logger.info("Statistics written to %s", output_path)
    return output_path
