"""JSON-span extraction from free-text model responses.

Models asked for "JSON only" still wrap the payload in prose or code
fences. This is the one place that touches unparsed response text: it
returns the first well-formed top-level JSON object, scanning left to right, or
raises ``JSONParseError``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterator

from consentlab.core.exceptions import JSONParseError
from consentlab.core.types import JsonDict

log = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def _balanced_span_end(content: str, start: int) -> int | None:
    """Index one past the ``}`` closing the object opened at ``start``.

    String- and escape-aware, so braces inside string values don't count.
    Returns None when the object is never closed.
    """
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(content)):
        ch = content[i]
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def iter_object_spans(content: str) -> Iterator[str]:
    """Yield top-level balanced ``{…}`` spans, left to right.

    Scanning resumes after each span's closing brace, so objects nested
    inside an earlier span are never yielded on their own. An unclosed
    brace ends the scan.
    """
    idx = content.find("{")
    while idx != -1:
        end = _balanced_span_end(content, idx)
        if end is None:
            return
        yield content[idx:end]
        idx = content.find("{", end)


def _try_parse(span: str) -> JsonDict | None:
    """Parse a span as a JSON object, tolerating trailing commas."""
    for candidate in (span, _TRAILING_COMMA_RE.sub(r"\1", span)):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def extract_json_object(content: str) -> JsonDict:
    """Return the first well-formed JSON object embedded in ``content``.

    Raises:
        JSONParseError: No ``{…}`` span exists or none of them parse.
    """
    if not isinstance(content, str) or "{" not in content:
        raise JSONParseError("Response contains no JSON object", raw_response=str(content or ""))

    for span in iter_object_spans(content):
        parsed = _try_parse(span)
        if parsed is not None:
            return parsed

    log.error(
        "Failed to parse JSON from LLM response",
        extra={"response_length": len(content), "response_preview": content[:200]},
    )
    raise JSONParseError("Response JSON could not be parsed", raw_response=content)
