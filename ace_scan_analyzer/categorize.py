"""
Classification of scanned file paths into target categories.
"""

from .patterns import CATEGORY_RULES, DEFAULT_CATEGORY


def categorize_target(file_path: str) -> str:
    """Map a file path to its category label.

    Rules in CATEGORY_RULES are checked in order against the lowercased
    path and the first rule with a matching marker wins. Paths matching no
    rule fall back to DEFAULT_CATEGORY.
    """
    lower_path = file_path.lower()
    for markers, label in CATEGORY_RULES:
        if any(marker in lower_path for marker in markers):
            return label
    return DEFAULT_CATEGORY
