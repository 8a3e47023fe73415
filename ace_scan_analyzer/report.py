"""
Human-readable report of ACE scan statistics.

The report is written through the package logger, so ``--quiet`` or
``enable_quiet()`` silences it and ``configure_logging(stream=...)``
redirects it.
"""

import unicodedata
from typing import Any, Dict, Tuple

import numpy as np

from . import config
from .logging_config import get_logger
from .records import AggregateStatistics

logger = get_logger(__name__)

HIGH = "High"
MEDIUM = "Medium"
LOW = "Low"

HARDENING_ADVICE = (
    "  1. Driver layer: storage drivers (storqosflt.sys/storvsp.sys) are scanned heavily;",
    "     consider 'monitor only' instead of 'block' for System32\\drivers.",
    "  2. Virtualization probing: hvhostsvc.dll/vmms.exe and similar components are scanned,",
    "     likely to detect virtual machines; decide whether to allow those paths.",
    "  3. Rule tuning: a 100% block rate can break game startup; allow the anti-cheat's",
    "     own directory and set the driver directory to 'ask'.",
)


def risk_tier(count: int, thresholds: Tuple[int, int]) -> str:
    """Classify a count as High/Medium/Low against (high_above, medium_above)."""
    high_above, medium_above = thresholds
    if count > high_above:
        return HIGH
    if count > medium_above:
        return MEDIUM
    return LOW


def display_width(text: str) -> int:
    """Terminal columns taken by ``text``; wide (CJK) characters count as two."""
    return sum(2 if unicodedata.east_asian_width(c) in ("W", "F") else 1 for c in text)


def pad_to_width(text: str, width: int) -> str:
    """Pad with spaces, or cut and end with an ellipsis, to fill ``width`` columns."""
    current = display_width(text)
    if current < width:
        return text + " " * (width - current)

    result = []
    used = 0
    for c in text:
        w = display_width(c)
        if used + w > width - 1:
            result.append("…")
            break
        result.append(c)
        used += w
    return "".join(result)


def shorten_path(path: str, width: int = config.PATH_COLUMN_WIDTH, head: int = 20, tail: int = 26) -> str:
    """Keep the start and end of a long path, eliding the middle."""
    if display_width(path) <= width:
        return path
    return f"{path[:head]}...{path[-tail:]}"


def _percentages(counts, total: int) -> np.ndarray:
    if total <= 0:
        return np.zeros(len(counts))
    return np.asarray(counts, dtype=float) / total * 100.0


def generate_detailed_report(stats: AggregateStatistics, width: int = config.REPORT_WIDTH) -> Dict[str, Any]:
    """Log the full analysis report.

    Returns:
        The headline figures shown in the report (block rate, peak hour).
    """
    logger.info("\n" + "=" * width)
    logger.info("ACE Anti-Cheat Disk Scan Analysis Report".center(width))
    logger.info(f"(based on {stats.total_attempts} valid log entries)".center(width))
    logger.info("=" * width)

    logger.info("\n[Core Metrics]")
    logger.info("  Total scan attempts:   %10d", stats.total_attempts)
    logger.info(
        "  Blocked attempts:      %10d (block rate: %.1f%%)", stats.blocked_attempts, stats.block_rate
    )
    logger.info("  Unique target files:   %10d", len(stats.unique_files))
    logger.info("  Active processes:      %10d", len(stats.processes))

    logger.info("\n[Process Activity]")
    for i, (proc, count) in enumerate(stats.top_processes(config.TOP_PROCESSES), 1):
        tier = risk_tier(count, config.PROCESS_RISK_THRESHOLDS)
        logger.info("  %2d. %s %8d times  %s", i, pad_to_width(proc, 28), count, tier)

    logger.info("\n[Most Scanned Targets (Top %d)]", config.TOP_FILES)
    logger.info("  %4s  %s %8s  %s", "Rank", pad_to_width("File Path", config.PATH_COLUMN_WIDTH), "Count", "Risk")
    logger.info("  " + "-" * (width - 2))
    for i, (path, count) in enumerate(stats.top_files(config.TOP_FILES), 1):
        shown = pad_to_width(shorten_path(path), config.PATH_COLUMN_WIDTH)
        tier = risk_tier(count, config.FILE_RISK_THRESHOLDS)
        logger.info("  %3d. %s %8d  %s", i, shown, count, tier)

    logger.info("\n[Target Categories]")
    logger.info(
        "  %s %12s %12s  %s",
        pad_to_width("Category", config.CATEGORY_COLUMN_WIDTH),
        "Scans",
        "Share",
        "Risk",
    )
    logger.info("  " + "-" * (width - 2))
    categories = stats.top_categories()
    shares = _percentages([count for _, count in categories], stats.total_attempts)
    for (label, count), share in zip(categories, shares):
        tier = risk_tier(count, config.CATEGORY_RISK_THRESHOLDS)
        logger.info(
            "  %s %10d x (%6.1f%%)  %s",
            pad_to_width(label, config.CATEGORY_COLUMN_WIDTH),
            count,
            share,
            tier,
        )

    logger.info("\n[File Types]")
    extensions = stats.top_extensions(config.TOP_EXTENSIONS)
    shares = _percentages([count for _, count in extensions], stats.total_attempts)
    for (ext, count), share in zip(extensions, shares):
        logger.info("  .%-12s %8d x (%6.1f%%)", ext, count, share)

    summary: Dict[str, Any] = {
        "block_rate": stats.block_rate,
        "peak_hour": None,
        "peak_count": 0,
    }

    if stats.time_distribution:
        labels = list(stats.time_distribution)
        counts = np.array(list(stats.time_distribution.values()))
        peak_idx = int(np.argmax(counts))
        peak_count = int(counts[peak_idx])
        summary["peak_hour"] = labels[peak_idx]
        summary["peak_count"] = peak_count

        logger.info("\n[Scan Time Distribution]")
        logger.info("  Peak: %s (%d scans)", labels[peak_idx], peak_count)

        bars = np.rint(counts / peak_count * config.BAR_WIDTH).astype(int)
        for label, count, bar in list(zip(labels, counts, bars))[: config.TOP_HOURS]:
            logger.info("  %s %6d %s", label, count, "█" * int(bar))

    logger.info("\n[Hardening Advice]")
    for line in HARDENING_ADVICE:
        logger.info(line)

    logger.info("\n" + "=" * width)
    return summary
