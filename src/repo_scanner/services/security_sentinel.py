"""Security sentinel — redacts secrets from file content before it is sent out.

Scanned repositories routinely contain committed keys; the assistant passes
every file through :func:`redact_files` before building a prompt.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Sequence

from repo_scanner.domain.entities import FileRecord

_REDACTION = "[REDACTED]"

_SECRET_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"AKIA[0-9A-Z]{16}"),
    re.compile(r"gh[pousr]_[A-Za-z0-9_]{36,}"),
    re.compile(r"gsk_[A-Za-z0-9]{20,}"),
    re.compile(r"sk-(?:proj-)?[A-Za-z0-9_\-]{20,}"),
    re.compile(
        r"(?:api[_\-]?key|secret[_\-]?key|access[_\-]?token|auth[_\-]?token)"
        r"""\s*[:=]\s*['"]?[A-Za-z0-9_\-/+]{20,}['"]?""",
        re.IGNORECASE,
    ),
    re.compile(
        r"""(?:password|passwd|secret)\s*[:=]\s*['"][^\s'"]{8,}['"]""",
        re.IGNORECASE,
    ),
    re.compile(
        r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----"
        r"[\s\S]*?-----END (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----"
    ),
    re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}"),
    re.compile(r"(?:postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis)://[^\s'\"]+@[^\s'\"]+"),
]


def redact(text: str) -> tuple[str, int]:
    """Replace every secret-looking match with ``[REDACTED]``.

    Returns the cleaned text and the number of replacements made.
    """
    total = 0
    for pattern in _SECRET_PATTERNS:
        text, count = pattern.subn(_REDACTION, text)
        total += count
    return text, total


def redact_files(files: Sequence[FileRecord]) -> tuple[list[FileRecord], int]:
    """Redact each record's content; records without secrets are returned as-is."""
    cleaned: list[FileRecord] = []
    total = 0
    for record in files:
        content, count = redact(record.content)
        if count:
            record = dataclasses.replace(record, content=content)
            total += count
        cleaned.append(record)
    return cleaned, total
