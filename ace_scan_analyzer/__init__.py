"""
ACE Scan Log Analyzer

Parses Huorong security log exports, extracts the disk-scan attempts made by
the ACE anti-cheat (SGuard) processes, and aggregates them into statistics
for a terminal report and a CSV export.
"""

from .analyzer import (
    AceScanLogAnalyzer,
    analyze_log_file,
    build_record,
    is_huorong_log,
    is_valid_entry,
    load_log_file,
    parse_ace_logs,
    split_entries,
)
from .categorize import categorize_target
from .exceptions import (
    AceScanAnalysisError,
    ConfigurationError,
    ExportError,
    LogFileNotFoundError,
    LogFormatError,
    NoValidEntriesError,
)
from .export import export_high_risk_targets, export_statistics_json
from .extraction import extract_field, extract_hour, process_name_from_path
from .patterns import CATEGORY_LABELS, CATEGORY_RULES, ENTRY_SEPARATOR, NO_EXTENSION
from .records import AggregateStatistics, ScanAttemptRecord, file_extension, hour_range_label
from .report import generate_detailed_report

__all__ = [
    # Parsing
    "AceScanLogAnalyzer",
    "parse_ace_logs",
    "analyze_log_file",
    "load_log_file",
    "is_huorong_log",
    "is_valid_entry",
    "split_entries",
    "build_record",
    # Extraction
    "extract_field",
    "extract_hour",
    "process_name_from_path",
    "categorize_target",
    "file_extension",
    "hour_range_label",
    # Records
    "ScanAttemptRecord",
    "AggregateStatistics",
    # Output
    "generate_detailed_report",
    "export_high_risk_targets",
    "export_statistics_json",
    # Exceptions
    "AceScanAnalysisError",
    "LogFileNotFoundError",
    "LogFormatError",
    "NoValidEntriesError",
    "ConfigurationError",
    "ExportError",
    # Patterns
    "ENTRY_SEPARATOR",
    "CATEGORY_RULES",
    "CATEGORY_LABELS",
    "NO_EXTENSION",
]

__version__ = "1.0.0"
