"""
Pytest configuration and shared fixtures for ACE scan log analysis tests.
"""

import os
import sys
from io import StringIO

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ace_scan_analyzer.logging_config import configure_logging  # noqa: E402

SEPARATOR = ">" * 60

SGUARD_PATH = "C:\\Program Files\\AntiCheatExpert\\SGuard\\x64\\SGuard64.exe"
SGUARD_SVC_PATH = "C:\\Program Files\\AntiCheatExpert\\SGuard\\x64\\SGuardSvc64.exe"
DRIVER_PATH = "C:\\Windows\\System32\\drivers\\storqosflt.sys"
ACE_BASE_PATH = "C:\\Program Files\\AntiCheatExpert\\SGuard\\x64\\ACE-Base.sys"


def make_entry(
    file_path=DRIVER_PATH,
    blocked=True,
    time="03:15:00",
    process=SGUARD_PATH,
    rule="ACE扫盘拦截",
    date="2024-05-01",
):
    """Build one Huorong log entry in the layout of a real export."""
    lines = [f"{date} {time} 触犯自定义防护规则"]
    if process is not None:
        lines.append(f"操作进程：{process}")
        lines.append(f'操作进程命令行："{process}"')
    if rule is not None:
        lines.append(f"触犯规则：{rule}")
    lines.append("操作类型：读取文件")
    if file_path is not None:
        lines.append(f"操作文件：{file_path}")
    lines.append("操作结果：已阻止" if blocked else "操作结果：已允许")
    return "\r\n".join(lines)


def join_entries(entries, header="火绒安全日志导出"):
    """Join entries with the separator; each entry's timestamp line follows it directly."""
    parts = [header] + list(entries)
    return ("\r\n" + SEPARATOR).join(parts) + "\r\n"


@pytest.fixture(autouse=True)
def quiet_logging():
    """Send package log output to a throwaway buffer and reset the level."""
    configure_logging(stream=StringIO(), error_stream=StringIO())
    yield
    configure_logging(stream=StringIO(), error_stream=StringIO())


@pytest.fixture
def log_stream():
    """Capture package log output."""
    stream = StringIO()
    configure_logging(stream=stream, error_stream=StringIO())
    return stream


@pytest.fixture
def sample_entries():
    """Five valid entries; the last has no rule, no process and a bad time."""
    return [
        make_entry(),
        make_entry(blocked=False, time="03:45:00"),
        make_entry(
            file_path="C:\\Windows\\System32\\hvhostsvc.dll",
            process=SGUARD_SVC_PATH,
            time="14:02:11",
        ),
        make_entry(
            file_path="C:\\Windows\\SysWOW64\\vmms.exe",
            blocked=False,
            time="23:59:59",
        ),
        make_entry(
            file_path=ACE_BASE_PATH,
            process=None,
            rule=None,
            time="bad-time",
        ),
    ]


@pytest.fixture
def sample_log(sample_entries):
    """A complete log export with a header and a non-ACE entry."""
    other = "2024-05-01 04:00:00 病毒查杀\r\n发现病毒：Trojan.Test\r\n处理结果：已清除"
    return join_entries(sample_entries + [other])


@pytest.fixture
def temp_log_file(tmp_path, sample_log):
    """Sample log written to disk with a BOM, like a Huorong export."""
    log_file = tmp_path / "fk-df.txt"
    log_file.write_text(sample_log, encoding="utf-8-sig")
    return log_file
