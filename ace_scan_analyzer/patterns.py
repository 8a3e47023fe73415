"""
Anchor substrings and classification rules for Huorong security logs.

The log format has no schema. Fields are located by literal anchors and
bounded by the nearest of several terminators, so every literal the parser
relies on is collected here.
"""

# =============================================================================
# ENTRY SEGMENTATION
# =============================================================================

# Entries are separated by a line of 60 '>' characters
ENTRY_SEPARATOR = ">" * 60

# Process family of the ACE anti-cheat (SGuard64.exe, SGuardSvc64.exe)
PRODUCT_SIGNATURE = "SGuard"

# File-level signature check: either identifier plus the custom-rule marker
PRODUCT_IDENTIFIERS = ("SGuard64", "SGuardSvc64")
CUSTOM_RULE_MARKER = "触犯自定义防护规则"

# =============================================================================
# FIELD ANCHORS
# =============================================================================

FILE_OPERATION_MARKER = "操作文件："
RESULT_MARKER = "操作结果："
BLOCKED_RESULT_MARKER = "操作结果：已阻止"
OPERATION_TYPE_MARKER = "操作类型："
PROCESS_MARKER = "操作进程："
PROCESS_COMMANDLINE_MARKER = "操作进程命令行："
RULE_TRIGGER_MARKER = "触犯规则："

CRLF = "\r\n"
LF = "\n"

# Terminator sets: the next field label or a raw line break, whichever is first
FILE_PATH_TERMINATORS = (RESULT_MARKER, OPERATION_TYPE_MARKER, CRLF, LF)
PROCESS_PATH_TERMINATORS = (PROCESS_COMMANDLINE_MARKER, OPERATION_TYPE_MARKER, CRLF, LF)
RULE_NAME_TERMINATORS = (OPERATION_TYPE_MARKER, CRLF, LF)

# =============================================================================
# DERIVED VALUES
# =============================================================================

NO_EXTENSION = "no-extension"
UNKNOWN_PROCESS = "unknown"

# =============================================================================
# TARGET CATEGORIES
# =============================================================================

SYSTEM_DRIVER = "System Driver"
SYSTEM32_CORE = "System32 Core"
SYSWOW64 = "SysWOW64 (32-bit)"
DOTNET_COMPONENT = ".NET Component"
ANTI_CHEAT_COMPONENT = "Anti-Cheat Component"
WINDOWS_APPS = "WindowsApps"
USER_DATA_DIRECTORY = "User Data Directory"
COMPONENT_STORE = "Component Store"
OTHER_SYSTEM_FILE = "Other System File"

# Ordered (markers, label) rules over the lowercased path; first match wins.
# Drivers come before system32 because every driver path is also under it.
CATEGORY_RULES = (
    (("system32\\drivers", "syswow64\\drivers"), SYSTEM_DRIVER),
    (("system32",), SYSTEM32_CORE),
    (("syswow64",), SYSWOW64),
    (("microsoft.net", "dotnet"), DOTNET_COMPONENT),
    (("anti cheat expert", "sguard", "ace", "eac"), ANTI_CHEAT_COMPONENT),
    (("windows\\systemapps", "windowsapps"), WINDOWS_APPS),
    (("programdata", "appdata"), USER_DATA_DIRECTORY),
    (("windows\\winsxs",), COMPONENT_STORE),
)

DEFAULT_CATEGORY = OTHER_SYSTEM_FILE

CATEGORY_LABELS = tuple(label for _, label in CATEGORY_RULES) + (DEFAULT_CATEGORY,)
