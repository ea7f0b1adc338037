import random
from datetime import datetime, timezone

ELLIPSIS = "…"
CONVERSATION_ID_RANGE = (1_000, 999_999_999)


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars and append an ellipsis; max_chars <= 0 disables."""
    if max_chars and max_chars > 0 and len(text) > max_chars:
        return text[:max_chars] + ELLIPSIS
    return text


def compose_text(title: str, subtitle: str | None, body: str) -> str:
    if subtitle:
        return f"{title} — {subtitle}: {body}"
    return f"{title} — {body}"


def iso_utc(ts: float) -> str:
    # 2024-05-01T12:00:00.000Z
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def random_conversation_id(rng: random.Random | None = None) -> int:
    lo, hi = CONVERSATION_ID_RANGE
    return (rng or random).randint(lo, hi)
