"""
Segmentation of Huorong security logs into ACE scan-attempt entries.

A log export is one text blob. It is split on the 60-character '>' separator,
segments lacking the SGuard signature or the file-operation anchor are
dropped, and every remaining entry is reduced to a ScanAttemptRecord and
folded into an AggregateStatistics.

The whole file is read into memory before parsing and the pass runs to
completion with no cancellation, so very large exports are bounded by
available memory.
"""

import os
from typing import List

from .config import LOG_ENCODING
from .exceptions import LogFileNotFoundError, LogFormatError, NoValidEntriesError
from .extraction import extract_field, extract_hour, process_name_from_path
from .logging_config import get_logger
from .patterns import (
    BLOCKED_RESULT_MARKER,
    CUSTOM_RULE_MARKER,
    ENTRY_SEPARATOR,
    FILE_OPERATION_MARKER,
    FILE_PATH_TERMINATORS,
    PROCESS_MARKER,
    PROCESS_PATH_TERMINATORS,
    PRODUCT_IDENTIFIERS,
    PRODUCT_SIGNATURE,
    RULE_NAME_TERMINATORS,
    RULE_TRIGGER_MARKER,
)
from .records import AggregateStatistics, ScanAttemptRecord

logger = get_logger(__name__)


def is_huorong_log(content: str) -> bool:
    """Quick signature check for a Huorong log containing ACE scan entries."""
    has_sguard = any(ident in content for ident in PRODUCT_IDENTIFIERS)
    return has_sguard and FILE_OPERATION_MARKER in content and CUSTOM_RULE_MARKER in content


def is_valid_entry(segment: str) -> bool:
    """Whether a separator-delimited segment is a scan-attempt entry.

    Only the presence of two anchors is checked. A segment that mentions
    both inside some unrelated value is still accepted.
    """
    if not segment.strip():
        return False
    return PRODUCT_SIGNATURE in segment and FILE_OPERATION_MARKER in segment


def split_entries(content: str) -> List[str]:
    """Split a log blob into its valid entries, in file order."""
    return [segment for segment in content.split(ENTRY_SEPARATOR) if is_valid_entry(segment)]


def build_record(entry: str) -> ScanAttemptRecord:
    """Extract every field of one entry; absent fields stay None."""
    record = ScanAttemptRecord()

    file_path = extract_field(entry, FILE_OPERATION_MARKER, FILE_PATH_TERMINATORS)
    if file_path is not None:
        record.file_path = file_path.strip() or None

    process_path = extract_field(entry, PROCESS_MARKER, PROCESS_PATH_TERMINATORS)
    if process_path is not None:
        record.process_name = process_name_from_path(process_path)

    rule_name = extract_field(entry, RULE_TRIGGER_MARKER, RULE_NAME_TERMINATORS)
    if rule_name is not None:
        record.rule_name = rule_name.strip() or None

    record.blocked = BLOCKED_RESULT_MARKER in entry
    record.hour = extract_hour(entry)
    return record


class AceScanLogAnalyzer:
    """Accumulates ACE scan statistics over one or more log blobs."""

    def __init__(self):
        self.stats = AggregateStatistics()
        self.files_processed = 0

    def process_entry(self, entry: str) -> ScanAttemptRecord:
        """Build the record for one valid entry and count it."""
        record = build_record(entry)
        self.stats.add_record(record)
        return record

    def process_log_content(self, content: str) -> int:
        """Process a whole log blob; returns the number of valid entries."""
        entries = split_entries(content)
        for entry in entries:
            self.process_entry(entry)

        logger.debug("Found %d valid scan entries", len(entries))
        return len(entries)

    def process_log_file(self, log_path: str) -> int:
        """Load, check and process a single log file."""
        content = load_log_file(log_path)
        valid = self.process_log_content(content)
        self.files_processed += 1
        return valid


def parse_ace_logs(content: str) -> AggregateStatistics:
    """Parse a log blob into a fresh AggregateStatistics.

    Pure function of ``content``: parsing the same text twice gives equal
    results. No I/O and no format signature check are performed here.
    """
    analyzer = AceScanLogAnalyzer()
    analyzer.process_log_content(content)
    return analyzer.stats


def load_log_file(log_path: str, encoding: str = LOG_ENCODING) -> str:
    """Read a log file and verify it looks like a Huorong ACE log.

    Raises:
        LogFileNotFoundError: If ``log_path`` does not exist.
        LogFormatError: If the content fails the signature check.
        OSError: If the file exists but cannot be read.
    """
    if not os.path.exists(log_path):
        raise LogFileNotFoundError("Log file does not exist", file_path=log_path)

    with open(log_path, encoding=encoding, errors="replace") as f:
        content = f.read()

    if not is_huorong_log(content):
        raise LogFormatError(
            "Not a Huorong security log (needs 'SGuard64' or 'SGuardSvc64', "
            f"'{FILE_OPERATION_MARKER}' and '{CUSTOM_RULE_MARKER}')",
            file_path=log_path,
        )
    return content


def analyze_log_file(log_path: str, encoding: str = LOG_ENCODING) -> AggregateStatistics:
    """Load and parse one log file.

    Raises:
        NoValidEntriesError: If no scan-attempt entry survives segmentation.
    """
    logger.info("Analyzing log file: %s", log_path)
    content = load_log_file(log_path, encoding)
    stats = parse_ace_logs(content)

    if stats.total_attempts == 0:
        raise NoValidEntriesError(
            "No valid ACE scan entries found", file_path=log_path, required=1, actual=0
        )

    logger.debug(
        "Parsed %d entries (%d blocked, %d unique files)",
        stats.total_attempts,
        stats.blocked_attempts,
        len(stats.unique_files),
    )
    return stats
