"""
Webhook payload rendering for hookwatch.


Public API:
- render_text(article, max_chars) -> str
- render_payload(article, source_tag, conversation_id, max_chars) -> dict


The payload shape is fixed by the receiving endpoint:
{timestamp, xId, conversationId, tweetId, text}.
"""
from __future__ import annotations
from typing import Dict

from ..utils.text import compose_text, iso_utc, truncate
from ..watchers.base import Article


def render_text(a: Article, max_chars: int = 1600) -> str:
    """Title, optional subtitle and body in one line, truncated to max_chars."""
    return truncate(compose_text(a.title, a.subtitle, a.body), max_chars)


def render_payload(a: Article, source_tag: str, conversation_id: int, max_chars: int = 1600) -> Dict[str, str]:
    return {
        "timestamp": iso_utc(a.timestamp),
        "xId": source_tag,
        "conversationId": str(conversation_id),
        "tweetId": a.url,
        "text": render_text(a, max_chars),
    }
