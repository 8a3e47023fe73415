"""
Integration tests for the ACE scan analyzer.

Tests the full workflow including:
- Log file loading and signature checks
- Statistics generation from files
- CSV export
- The command-line entry point
"""

import csv
import json

import pytest
from conftest import DRIVER_PATH, join_entries, make_entry

from ace_scan_analyzer.analyzer import AceScanLogAnalyzer, analyze_log_file, load_log_file
from ace_scan_analyzer.cli import main, parse_args
from ace_scan_analyzer.exceptions import (
    ConfigurationError,
    ExportError,
    LogFileNotFoundError,
    LogFormatError,
    NoValidEntriesError,
)
from ace_scan_analyzer.export import CSV_HEADER, export_high_risk_targets, export_statistics_json
from ace_scan_analyzer.records import AggregateStatistics, ScanAttemptRecord


class TestLogFileLoading:
    """Tests for reading log files."""

    def test_load_strips_bom(self, temp_log_file):
        content = load_log_file(str(temp_log_file))
        assert not content.startswith("\ufeff")
        assert "操作文件：" in content

    def test_missing_file(self, tmp_path):
        with pytest.raises(LogFileNotFoundError) as exc_info:
            load_log_file(str(tmp_path / "missing.txt"))
        assert exc_info.value.file_path.endswith("missing.txt")

    def test_not_a_huorong_log(self, tmp_path):
        other = tmp_path / "other.log"
        other.write_text("2024-01-01 00:00:00 plain application log\n", encoding="utf-8")
        with pytest.raises(LogFormatError):
            load_log_file(str(other))

    def test_undecodable_bytes_replaced(self, tmp_path, sample_log):
        log_file = tmp_path / "broken.txt"
        log_file.write_bytes(sample_log.encode("utf-8") + b"\xff\xfe\xfa")
        assert "SGuard64" in load_log_file(str(log_file))

    def test_gbk_file_fails_signature(self, tmp_path, sample_log):
        """A non-UTF-8 export decodes with replacements and fails the check."""
        log_file = tmp_path / "gbk.txt"
        log_file.write_bytes(sample_log.encode("gbk"))
        with pytest.raises(LogFormatError):
            load_log_file(str(log_file))


class TestAnalyzeLogFile:
    """Tests for loading plus parsing."""

    def test_statistics(self, temp_log_file):
        stats = analyze_log_file(str(temp_log_file))
        assert stats.total_attempts == 5
        assert stats.blocked_attempts == 3
        assert stats.unique_files[DRIVER_PATH] == 2

    def test_no_valid_entries(self, tmp_path):
        # Passes the file signature but every segment lacks the file-operation anchor
        log_file = tmp_path / "empty.txt"
        log_file.write_text(
            "SGuard64 触犯自定义防护规则\n" + ">" * 60 + "\n操作文件：C:\\a.sys\n",
            encoding="utf-8",
        )
        with pytest.raises(NoValidEntriesError) as exc_info:
            analyze_log_file(str(log_file))
        assert exc_info.value.actual == 0

    def test_analyzer_counts_files(self, temp_log_file):
        analyzer = AceScanLogAnalyzer()
        assert analyzer.process_log_file(str(temp_log_file)) == 5
        assert analyzer.files_processed == 1


class TestCsvExport:
    """Tests for the high-risk target CSV."""

    def _read(self, path):
        with open(path, encoding="utf-8-sig", newline="") as f:
            return list(csv.reader(f))

    def test_bom_and_header(self, temp_log_file, tmp_path):
        out = tmp_path / "targets.csv"
        export_high_risk_targets(analyze_log_file(str(temp_log_file)), str(out))
        assert out.read_bytes().startswith(b"\xef\xbb\xbf")
        rows = self._read(out)
        assert rows[0] == CSV_HEADER

    def test_rows_sorted_by_count(self, temp_log_file, tmp_path):
        out = tmp_path / "targets.csv"
        export_high_risk_targets(analyze_log_file(str(temp_log_file)), str(out))
        rows = self._read(out)[1:]
        assert len(rows) == 4
        assert rows[0] == ["1", "2", DRIVER_PATH, "Low", "sys", DRIVER_PATH]
        counts = [int(r[1]) for r in rows]
        assert counts == sorted(counts, reverse=True)
        assert [r[0] for r in rows] == ["1", "2", "3", "4"]

    def test_limit(self, tmp_path):
        stats = AggregateStatistics()
        for i in range(250):
            stats.add_record(ScanAttemptRecord(file_path=f"C:\\f{i:03d}.sys"))
        out = tmp_path / "targets.csv"
        export_high_risk_targets(stats, str(out))
        assert len(self._read(out)) == 201

        export_high_risk_targets(stats, str(out), limit=10)
        assert len(self._read(out)) == 11

    def test_risk_levels(self, tmp_path):
        stats = AggregateStatistics()
        for path, count in (("hot.sys", 31), ("warm.sys", 11), ("cold.sys", 10)):
            for _ in range(count):
                stats.add_record(ScanAttemptRecord(file_path=path))
        out = tmp_path / "targets.csv"
        export_high_risk_targets(stats, str(out))
        levels = {r[2]: r[3] for r in self._read(out)[1:]}
        assert levels == {"hot.sys": "High", "warm.sys": "Medium", "cold.sys": "Low"}

    def test_special_characters_quoted(self, tmp_path):
        stats = AggregateStatistics()
        tricky = 'C:\\dir,with "quotes"\\a.dll'
        stats.add_record(ScanAttemptRecord(file_path=tricky))
        out = tmp_path / "targets.csv"
        export_high_risk_targets(stats, str(out))
        rows = self._read(out)
        assert rows[1][2] == tricky
        assert rows[1][5] == tricky
        assert '"C:\\dir,with ""quotes""\\a.dll"' in out.read_text(encoding="utf-8-sig")

    def test_no_extension_column(self, tmp_path):
        stats = AggregateStatistics()
        stats.add_record(ScanAttemptRecord(file_path="C:\\Windows\\System32\\drivers\\etc\\hosts"))
        out = tmp_path / "targets.csv"
        export_high_risk_targets(stats, str(out))
        assert self._read(out)[1][4] == "no-extension"

    def test_unwritable_destination(self, tmp_path):
        with pytest.raises(ExportError):
            export_high_risk_targets(AggregateStatistics(), str(tmp_path / "missing" / "x.csv"))


class TestJsonExport:
    """Tests for the raw statistics JSON."""

    def test_round_trips_counts(self, temp_log_file, tmp_path):
        out = tmp_path / "stats.json"
        export_statistics_json(analyze_log_file(str(temp_log_file)), str(out))
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["blocked_attempts"] == 3
        assert data["rules_triggered"] == {"ACE扫盘拦截": 4}

    def test_unwritable_destination(self, tmp_path):
        target = tmp_path / "missing" / "stats.json"
        with pytest.raises(ExportError) as exc_info:
            export_statistics_json(AggregateStatistics(), str(target))
        assert exc_info.value.output_path == str(target)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestCommandLine:
    """Tests for the command-line entry point."""

    def test_parse_args(self):
        log_path, options, flags = parse_args(["a.txt", "--limit", "5", "--output=o.csv", "--quiet"])
        assert log_path == "a.txt"
        assert options == {"--limit": "5", "--output": "o.csv"}
        assert flags == {"--quiet"}

    def test_parse_args_errors(self):
        with pytest.raises(ConfigurationError):
            parse_args(["--bogus"])
        with pytest.raises(ConfigurationError):
            parse_args(["--output"])
        with pytest.raises(ConfigurationError):
            parse_args(["a.txt", "b.txt"])

    def test_full_run(self, temp_log_file, tmp_path, capsys):
        out = tmp_path / "targets.csv"
        stats_json = tmp_path / "stats.json"
        code = main([str(temp_log_file), "--output", str(out), "--json", str(stats_json)])
        assert code == 0
        assert out.exists()
        data = json.loads(stats_json.read_text(encoding="utf-8"))
        assert data["total_attempts"] == 5
        assert data["unique_files"][DRIVER_PATH] == 2
        assert "[Core Metrics]" in capsys.readouterr().out

    def test_no_export(self, temp_log_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(temp_log_file), "--no-export", "--quiet"]) == 0
        assert not (tmp_path / "high_risk_targets.csv").exists()

    def test_default_export_path(self, temp_log_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(temp_log_file), "--quiet"]) == 0
        assert (tmp_path / "high_risk_targets.csv").exists()

    def test_default_log_path(self, temp_log_file, tmp_path, monkeypatch):
        monkeypatch.chdir(temp_log_file.parent)
        assert main(["--no-export", "--quiet"]) == 0

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt")]) == 1
        captured = capsys.readouterr()
        assert "does not exist" in captured.err
        assert "does not exist" not in captured.out

    def test_bad_format(self, tmp_path, capsys):
        other = tmp_path / "other.log"
        other.write_text("hello\n", encoding="utf-8")
        assert main([str(other)]) == 1
        assert "Not a Huorong security log" in capsys.readouterr().err

    def test_no_entries(self, tmp_path, capsys):
        log_file = tmp_path / "fk-df.txt"
        # Signature passes, but the anchors never share a segment
        log_file.write_text(
            "SGuard64 触犯自定义防护规则\n" + ">" * 60 + "\n操作文件：x\n", encoding="utf-8"
        )
        assert main([str(log_file)]) == 1
        assert "No valid ACE scan entries found" in capsys.readouterr().err

    def test_bad_limit(self, temp_log_file, capsys):
        assert main([str(temp_log_file), "--limit", "zero"]) == 1
        assert "--limit must be an integer" in capsys.readouterr().err

    def test_unwritable_json_path(self, temp_log_file, tmp_path, capsys):
        target = tmp_path / "nodir" / "stats.json"
        code = main([str(temp_log_file), "--no-export", "--quiet", "--json", str(target)])
        assert code == 1
        assert "Cannot write JSON statistics" in capsys.readouterr().err

    def test_unwritable_csv_path(self, temp_log_file, tmp_path, capsys):
        target = tmp_path / "nodir" / "targets.csv"
        assert main([str(temp_log_file), "--quiet", "--output", str(target)]) == 1
        assert "Cannot write CSV export" in capsys.readouterr().err

    def test_quiet_still_reports_errors(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt"), "--quiet"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "does not exist" in captured.err

    def test_help(self, capsys):
        assert main(["--help"]) == 0
        assert "Usage: ace-scan-analyzer" in capsys.readouterr().out

    def test_single_entry_log(self, tmp_path):
        log_file = tmp_path / "one.txt"
        log_file.write_text(join_entries([make_entry()]), encoding="utf-8")
        assert main([str(log_file), "--no-export", "--quiet"]) == 0
