"""Google Chat message payloads."""

from __future__ import annotations

from typing import Any


def text_payload(text: str) -> dict[str, Any]:
    """Build a plain text message body."""
    return {"text": text}


def text_card_payload(text: str) -> dict[str, Any]:
    """Build a card with a single section holding one text paragraph.

    Args:
        text: Paragraph text. Google Chat accepts a small HTML subset here,
            e.g. `<font color="#d81111">...</font>`.

    Returns:
        Card message body.
    """
    return {
        "cards": [
            {
                "sections": [
                    {
                        "widgets": [
                            {"textParagraph": {"text": text}},
                        ]
                    }
                ]
            }
        ]
    }
