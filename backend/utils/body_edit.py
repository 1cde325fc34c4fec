# backend/utils/body_edit.py
"""Apply a plain-text suggestion to an HTML release body.

Suggestions are produced against the visible text, while the body is HTML,
so a literal replace is only the first attempt. The fallbacks tolerate markup
and whitespace differences between the two.
"""
import re
from typing import List, Optional, Tuple

_TAG = re.compile(r"<[^>]*>")
_WS = re.compile(r"\s+")


def _tag_aware_pattern(plain: str) -> re.Pattern:
    # Words must appear in order; whitespace and tags may sit between them
    words = [re.escape(w) for w in plain.split()]
    return re.compile(r"(?:\s|<[^>]*>)+".join(words), re.IGNORECASE)


def _visible_text(html: str) -> Tuple[str, List[int], List[int]]:
    """Drop tags and collapse whitespace, keeping an index map back to html.

    Tags are zero-width here, so a word split by inline markup
    (``Ro<b>bot</b>ics``) reads as one word. Returns the normalized text
    plus, per normalized character, the html offsets where it starts and ends.
    """
    chars: List[str] = []
    starts: List[int] = []
    ends: List[int] = []
    pending: Optional[Tuple[int, int]] = None
    i, n = 0, len(html)

    while i < n:
        ch = html[i]
        if ch == "<":
            close = html.find(">", i)
            if close != -1:
                i = close + 1
                continue

        if ch.isspace():
            pending = (pending[0], i + 1) if pending else (i, i + 1)
        else:
            if pending and chars:
                chars.append(" ")
                starts.append(pending[0])
                ends.append(pending[1])
            pending = None
            chars.append(ch)
            starts.append(i)
            ends.append(i + 1)
        i += 1

    return "".join(chars), starts, ends


def apply_edit(body: str, original: str, improved: str) -> Optional[str]:
    """Return the body with the first occurrence of ``original`` replaced, or None if absent."""
    if not original.strip():
        return None
    if original in body:
        return body.replace(original, improved, 1)

    pattern = _tag_aware_pattern(original)
    if pattern.search(body):
        return pattern.sub(lambda _m: improved, body, count=1)

    needle = _WS.sub(" ", original).strip()
    text, starts, ends = _visible_text(body)
    idx = text.find(needle)
    if idx == -1:
        return None
    start = starts[idx]
    end = ends[idx + len(needle) - 1]
    return body[:start] + improved + body[end:]


def strip_tags(html: str) -> str:
    return _WS.sub(" ", _TAG.sub(" ", html or "")).strip()
