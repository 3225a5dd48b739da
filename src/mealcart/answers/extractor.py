"""Two-tier JSON extraction from raw model answers."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Optional

from mealcart.models.answer import (
    DirectJson,
    ExtractionResult,
    FencedJson,
    JsonValue,
    PlainText,
)

logger = logging.getLogger(__name__)

# Blocks are consumed whole so an opening fence is always paired with its own closing fence.
_FENCE_RE = re.compile(r"```(?P<info>[^\n`]*)(?:\r?\n(?P<body>.*?))?```", re.DOTALL)
_JSON_LANGUAGE = "json"


class _NonStandardConstant(ValueError):
    pass


@dataclass(frozen=True)
class FencedBlock:
    """Body of a markdown code fence eligible for JSON parsing."""

    body: str
    language: Optional[str] = None


def _reject_constant(name: str) -> float:
    raise _NonStandardConstant(f"non-standard JSON constant {name}")


def parse_strict_json(text: str) -> JsonValue:
    """Parse RFC 8259 JSON, rejecting NaN and Infinity literals."""

    return json.loads(text, parse_constant=_reject_constant)


def _block_from_match(match: re.Match[str]) -> Optional[FencedBlock]:
    info = match.group("info")
    body = match.group("body") or ""
    label = info.strip()

    if not label:
        return FencedBlock(body=body)
    if label.lower() == _JSON_LANGUAGE:
        return FencedBlock(body=body, language=label)

    stripped = info.lstrip()
    # One-line fences such as ```json {"a": 1}``` carry the payload in the info string.
    if stripped[: len(_JSON_LANGUAGE)].lower() == _JSON_LANGUAGE:
        remainder = stripped[len(_JSON_LANGUAGE):]
        if remainder[:1].isspace() or remainder[:1] in {"{", "["}:
            return FencedBlock(
                body=f"{remainder}\n{body}" if body else remainder,
                language=stripped[: len(_JSON_LANGUAGE)],
            )
    if stripped[:1] in {"{", "["}:
        return FencedBlock(body=f"{stripped}\n{body}" if body else stripped)
    return None


def find_fenced_block(text: str) -> Optional[FencedBlock]:
    """Return the first fenced block tagged ``json`` or untagged, if any.

    Blocks tagged with another language are skipped. Only the first eligible
    block is returned; later fences are never consulted.
    """

    for match in _FENCE_RE.finditer(text):
        block = _block_from_match(match)
        if block is not None:
            return block
    return None


def extract(raw: str) -> ExtractionResult:
    """Classify raw model text as direct JSON, fenced JSON or plain text.

    Never raises: every JSON failure falls through to the next tier, and any
    string (including empty or whitespace-only input) yields a result.
    """

    trimmed = (raw or "").strip()
    if not trimmed:
        return PlainText(text="")

    try:
        return DirectJson(payload=parse_strict_json(trimmed))
    except (ValueError, RecursionError) as exc:
        logger.debug("Answer is not direct JSON: %s", exc)

    block = find_fenced_block(trimmed)
    if block is not None:
        try:
            payload = parse_strict_json(block.body.strip())
        except (ValueError, RecursionError) as exc:
            snippet = block.body.strip().replace("\n", " ")[:200]
            logger.debug("Ignoring malformed fenced JSON: %s: payload=%s", exc, snippet)
        else:
            return FencedJson(payload=payload, language=block.language)

    return PlainText(text=raw)


__all__ = ["FencedBlock", "extract", "find_fenced_block", "parse_strict_json"]
