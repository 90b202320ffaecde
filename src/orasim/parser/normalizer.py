"""
Dialect Normalizer - Rewrites Oracle dialect tokens to canonical forms
"""

import re
from typing import List, Tuple
from ..constants import STATEMENT_TERMINATORS


# Ordered: the parameterised NUMBER forms must run before bare NUMBER
REWRITE_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'\bVARCHAR2\s*\(\s*(\d+)\s*\)', re.IGNORECASE), r'VARCHAR(\1)'),
    (re.compile(r'\bNUMBER\s*\(\s*(\d+)\s*,\s*(\d+)\s*\)', re.IGNORECASE), r'DECIMAL(\1,\2)'),
    (re.compile(r'\bNUMBER\s*\(\s*(\d+)\s*\)', re.IGNORECASE), 'INTEGER'),
    (re.compile(r'\bNUMBER\b', re.IGNORECASE), 'DECIMAL(38,10)'),
    (re.compile(r'\bDATE\b', re.IGNORECASE), 'TIMESTAMP'),
    (re.compile(r'\bSYSDATE\b', re.IGNORECASE), 'CURRENT_TIMESTAMP'),
    (re.compile(r'\bSYSTIMESTAMP\b', re.IGNORECASE), 'CURRENT_TIMESTAMP'),
    (re.compile(r'\bNVL\s*\(', re.IGNORECASE), 'COALESCE('),
    (re.compile(r'\|\|'), '+'),
]


def normalize(sql: str) -> str:
    """
    Apply every dialect rewrite to the statement text

    Args:
        sql: Raw statement text (terminator already stripped)

    Returns:
        Rewritten text. No validation is performed.
    """
    for pattern, replacement in REWRITE_RULES:
        sql = pattern.sub(replacement, sql)
    return sql


def strip_terminator(sql: str) -> str:
    """Trim whitespace and a single trailing ';' or '/'"""
    cleaned = sql.strip()
    if cleaned.endswith(STATEMENT_TERMINATORS):
        cleaned = cleaned[:-1].rstrip()
    return cleaned
