"""Locate the JSON answer inside a completion response.

A response may carry the answer in one of three places:

- a text content block (``output_text`` or ``text``)
- a structured ``json`` content block
- the aggregated top-level ``output_text`` field

Output items and their content blocks are scanned in order and the first
block with a payload wins. The aggregated text is only consulted when no
block matched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

from leadplan.errors import ExtractionError, ParseError
from leadplan.schemas import JsonBlock, LLMResponse, TextBlock


PayloadKind = Literal["text", "json", "aggregated_text"]


@dataclass(frozen=True)
class ExtractedPayload:
    """The located answer and where it came from."""
    kind: PayloadKind
    value: Any

    def decode(self) -> Any:
        """Return the payload as decoded JSON.

        ``json`` payloads are already structured and returned as-is.

        Raises:
            ParseError: if a text payload is not valid JSON.
        """
        if self.kind == "json":
            return self.value
        try:
            return json.loads(self.value)
        except json.JSONDecodeError as e:
            raise ParseError(f"Model returned invalid JSON: {e}") from e


def find_payload(response: LLMResponse) -> ExtractedPayload | None:
    """Return the first recognized payload, or None."""
    for item in response.output:
        for block in item.content or []:
            if isinstance(block, TextBlock) and block.text:
                return ExtractedPayload(kind="text", value=block.text)
            if isinstance(block, JsonBlock) and block.data is not None:
                return ExtractedPayload(kind="json", value=block.data)

    if response.output_text:
        return ExtractedPayload(kind="aggregated_text", value=response.output_text)

    return None


def extract_payload(response: LLMResponse) -> ExtractedPayload:
    """Like ``find_payload`` but raises when nothing was found.

    Raises:
        ExtractionError: if the response holds no usable payload.
    """
    payload = find_payload(response)
    if payload is None:
        raise ExtractionError("Unable to extract JSON response from model.")
    return payload
