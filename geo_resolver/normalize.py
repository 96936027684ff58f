"""
Text cleanup applied to raw input before matching.

Keeps letters, digits, hyphens and spaces; everything else collapses to a
single space. The result is stable: normalize(normalize(s)) == normalize(s).
"""

from __future__ import annotations

import re
from typing import Optional

# \w also covers "_", which is punctuation here
_PUNCTUATION_RE = re.compile(r"(?:[^\w\- ]|_)+")
_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]*>")

# Raw NBSP, its HTML entity, and the entity escaped a second time
_NBSP_FORMS = ("\xa0", "&nbsp;", "&amp;nbsp;")


def normalize(text: Optional[str]) -> str:
    if not text:
        return ""

    result = _PUNCTUATION_RE.sub(" ", text)
    result = _WHITESPACE_RE.sub(" ", result)
    for form in _NBSP_FORMS:
        result = result.replace(form, " ")
    result = _TAG_RE.sub("", result)

    return result.strip()
