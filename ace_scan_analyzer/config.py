"""
Run defaults for the ACE scan analyzer.

Every value here can be overridden per run from the command line.
"""

# Log file analyzed when no path is given
DEFAULT_LOG_PATH = "fk-df.txt"

# CSV export
DEFAULT_EXPORT_PATH = "high_risk_targets.csv"
EXPORT_ROW_LIMIT = 200
EXPORT_ENCODING = "utf-8-sig"

# Encoding used to read logs; undecodable bytes are replaced, not fatal
LOG_ENCODING = "utf-8-sig"

# Risk tiers by scan count: (high_above, medium_above)
FILE_RISK_THRESHOLDS = (30, 10)
PROCESS_RISK_THRESHOLDS = (500, 200)
CATEGORY_RISK_THRESHOLDS = (1000, 300)

# Report sizes
REPORT_WIDTH = 76
TOP_PROCESSES = 5
TOP_FILES = 15
TOP_EXTENSIONS = 8
TOP_HOURS = 12
PATH_COLUMN_WIDTH = 50
CATEGORY_COLUMN_WIDTH = 20
BAR_WIDTH = 40
