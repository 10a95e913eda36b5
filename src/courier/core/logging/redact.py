from __future__ import annotations

import re

import httpx

_SECRET_VALUE_RE = re.compile(r"(?i)(token|key|secret|password)(\s*[=:]\s*)([^\s,;&]+)")
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([^\s]+)")


def redact_string(s: str) -> str:
    redacted = _SECRET_VALUE_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}***", s)
    redacted = _BEARER_RE.sub(lambda m: f"{m.group(1)}***", redacted)
    return redacted


def redact_url(url: httpx.URL | str) -> str:
    """Render a URL for logs with every query value masked."""
    try:
        parsed = url if isinstance(url, httpx.URL) else httpx.URL(url)
    except httpx.InvalidURL:
        return "[invalid-url]"
    base = str(parsed).split("?", 1)[0]
    if not parsed.query:
        return base
    masked = "&".join(f"{key}=***" for key in parsed.params.keys())
    return f"{base}?{masked}"
