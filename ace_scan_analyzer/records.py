"""
Record and aggregate classes for ACE scan log analysis.
"""

from typing import Any, Dict, List, Optional, Tuple

from .categorize import categorize_target
from .patterns import NO_EXTENSION


class ScanAttemptRecord:
    """Fields extracted from one scan-attempt entry.

    Attributes:
        file_path: Trimmed target file path.
        process_name: Executable name of the scanning process.
        rule_name: Trimmed name of the triggered protection rule.
        blocked: Whether the entry carries the blocked result marker.
        hour: Hour of day from the entry's timestamp, 0-23.
    """

    __slots__ = ("file_path", "process_name", "rule_name", "blocked", "hour")

    file_path: Optional[str]
    process_name: Optional[str]
    rule_name: Optional[str]
    blocked: bool
    hour: Optional[int]

    def __init__(
        self,
        file_path: Optional[str] = None,
        process_name: Optional[str] = None,
        rule_name: Optional[str] = None,
        blocked: bool = False,
        hour: Optional[int] = None,
    ) -> None:
        self.file_path = file_path
        self.process_name = process_name
        self.rule_name = rule_name
        self.blocked = blocked
        self.hour = hour

    def __repr__(self) -> str:
        return (
            f"ScanAttemptRecord(file_path={self.file_path!r}, process_name={self.process_name!r}, "
            f"rule_name={self.rule_name!r}, blocked={self.blocked!r}, hour={self.hour!r})"
        )


def file_extension(file_path: str) -> str:
    """Lowercased text after the last '.', or NO_EXTENSION."""
    if "." not in file_path:
        return NO_EXTENSION
    ext = file_path.rsplit(".", 1)[1].strip().lower()
    return ext or NO_EXTENSION


def hour_range_label(hour: int) -> str:
    """Format an hour as its 'HH:00-HH:59' bucket label."""
    return f"{hour:02d}:00-{hour:02d}:59"


def _increment(mapping: Dict[str, int], key: str, amount: int = 1) -> bool:
    """Increment-or-insert; returns True when the key is new."""
    if key in mapping:
        mapping[key] += amount
        return False
    mapping[key] = amount
    return True


def _ranked(mapping: Dict[str, int], n: Optional[int]) -> List[Tuple[str, int]]:
    # Count descending, key ascending so ties come out the same on every run
    items = sorted(mapping.items(), key=lambda kv: (-kv[1], kv[0]))
    return items if n is None else items[:n]


class AggregateStatistics:
    """Counts accumulated over every valid entry of one log.

    Attributes:
        total_attempts: Entries that passed the segmentation filter.
        blocked_attempts: Entries carrying the blocked result marker.
        unique_files: File path -> occurrences.
        processes: Process name -> occurrences.
        rules_triggered: Rule name -> occurrences.
        file_extensions: Lowercased extension (or NO_EXTENSION) -> occurrences.
        target_categories: Category label -> occurrences.
        time_distribution: Hour range label -> occurrences, sorted by label.
    """

    __slots__ = (
        "total_attempts",
        "blocked_attempts",
        "unique_files",
        "processes",
        "rules_triggered",
        "file_extensions",
        "target_categories",
        "time_distribution",
    )

    total_attempts: int
    blocked_attempts: int
    unique_files: Dict[str, int]
    processes: Dict[str, int]
    rules_triggered: Dict[str, int]
    file_extensions: Dict[str, int]
    target_categories: Dict[str, int]
    time_distribution: Dict[str, int]

    def __init__(self) -> None:
        self.total_attempts = 0
        self.blocked_attempts = 0
        self.unique_files = {}
        self.processes = {}
        self.rules_triggered = {}
        self.file_extensions = {}
        self.target_categories = {}
        self.time_distribution = {}

    def add_record(self, record: ScanAttemptRecord) -> None:
        """Fold one entry's record into the counts.

        Absent fields are skipped. Every counted file path is also counted
        under its extension and its target category.
        """
        self.total_attempts += 1
        if record.blocked:
            self.blocked_attempts += 1

        if record.file_path:
            _increment(self.unique_files, record.file_path)
            _increment(self.file_extensions, file_extension(record.file_path))
            _increment(self.target_categories, categorize_target(record.file_path))

        if record.process_name:
            _increment(self.processes, record.process_name)

        if record.rule_name:
            _increment(self.rules_triggered, record.rule_name)

        if record.hour is not None:
            self._add_hours({hour_range_label(record.hour): 1})

    def _add_hours(self, counts: Dict[str, int]) -> None:
        inserted = False
        for label, count in counts.items():
            inserted = _increment(self.time_distribution, label, count) or inserted
        if inserted:
            self.time_distribution = dict(sorted(self.time_distribution.items()))

    def merge(self, other: "AggregateStatistics") -> None:
        """Add another (partial) aggregate's counts into this one."""
        self.total_attempts += other.total_attempts
        self.blocked_attempts += other.blocked_attempts
        for mine, theirs in (
            (self.unique_files, other.unique_files),
            (self.processes, other.processes),
            (self.rules_triggered, other.rules_triggered),
            (self.file_extensions, other.file_extensions),
            (self.target_categories, other.target_categories),
        ):
            for key, count in theirs.items():
                _increment(mine, key, count)
        self._add_hours(other.time_distribution)

    @property
    def block_rate(self) -> float:
        """Blocked attempts as a percentage of all attempts."""
        if self.total_attempts == 0:
            return 0.0
        return self.blocked_attempts / self.total_attempts * 100.0

    def top_files(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        return _ranked(self.unique_files, n)

    def top_processes(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        return _ranked(self.processes, n)

    def top_categories(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        return _ranked(self.target_categories, n)

    def top_extensions(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        return _ranked(self.file_extensions, n)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready snapshot of all counts."""
        return {
            "total_attempts": self.total_attempts,
            "blocked_attempts": self.blocked_attempts,
            "block_rate": round(self.block_rate, 1),
            "unique_files": dict(self.unique_files),
            "processes": dict(self.processes),
            "rules_triggered": dict(self.rules_triggered),
            "file_extensions": dict(self.file_extensions),
            "target_categories": dict(self.target_categories),
            "time_distribution": dict(self.time_distribution),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AggregateStatistics):
            return NotImplemented
        return self.to_dict() == other.to_dict() and list(self.time_distribution) == list(
            other.time_distribution
        )

    def __repr__(self) -> str:
        return (
            f"AggregateStatistics(total_attempts={self.total_attempts}, "
            f"blocked_attempts={self.blocked_attempts}, unique_files={len(self.unique_files)})"
        )
