# hookwatch/watchers/article_list.py
# Fetcher for a JSON "latest articles" listing endpoint authenticated with
# one API key per call, taken round-robin from a KeyPool.

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import requests

from .base import Article, Watcher
from ..net import TransportError, get_json
from ..utils.keys import KeyPool
from ..utils.log import get_logger

logger = get_logger("hookwatch.article_list")


@dataclass(frozen=True)
class ArticleFields:
    """Record keys of the listing response. The timestamp key differs per deployment."""
    id: str = "GUID"
    timestamp: str = "CREATED_ON"
    title: str = "TITLE"
    subtitle: str = "SUBTITLE"
    body: str = "BODY"
    url: str = "URL"


def _str(v: Any) -> str:
    return "" if v is None else str(v)


def _timestamp(v: Any) -> float:
    """Epoch seconds as delivered (int stays int); must map to a real UTC datetime."""
    if v is None or isinstance(v, bool):
        raise ValueError("missing timestamp")
    if isinstance(v, str):
        s = v.strip()
        try:
            v = int(s)
        except ValueError:
            v = float(s)
    elif not isinstance(v, (int, float)):
        raise TypeError(f"timestamp of type {type(v).__name__}")
    if not math.isfinite(v):
        raise ValueError(f"non-finite timestamp {v!r}")
    # Raises OverflowError/OSError/ValueError outside the representable range.
    datetime.fromtimestamp(v, tz=timezone.utc)
    return v


def parse_record(rec: Mapping[str, Any], fields: ArticleFields) -> Article:
    return Article(
        id=_str(rec.get(fields.id)),
        timestamp=_timestamp(rec.get(fields.timestamp)),
        title=_str(rec.get(fields.title)),
        subtitle=_str(rec.get(fields.subtitle)) or None,
        body=_str(rec.get(fields.body)),
        url=_str(rec.get(fields.url)),
    )


class ArticleListWatcher(Watcher):
    name = "article_list"

    def __init__(
        self,
        session: requests.Session,
        url: str,
        keys: KeyPool,
        limit: int = 10,
        lang: Optional[str] = "EN",
        list_field: str = "Data",
        key_header: str = "X-API-Key",
        fields: ArticleFields = ArticleFields(),
    ):
        self.session = session
        self.url = url
        self.keys = keys
        self.limit = limit
        self.lang = lang
        self.list_field = list_field
        self.key_header = key_header
        self.fields = fields

    def _params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": self.limit}
        if self.lang:
            params["lang"] = self.lang
        return params

    def fetch_latest(self) -> List[Article]:
        # Advance the cursor before the call so failed calls rotate too.
        api_key = self.keys.next()
        data = get_json(self.session, self.url, params=self._params(), headers={self.key_header: api_key})
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected listing body from {self.url}: {type(data).__name__}")

        records = data.get(self.list_field) or []
        if not isinstance(records, list):
            raise TransportError(f"Listing field {self.list_field!r} is not a list")

        articles: List[Article] = []
        for idx, rec in enumerate(records):
            try:
                articles.append(parse_record(rec, self.fields))
            except (AttributeError, TypeError, ValueError, OverflowError, OSError) as e:
                logger.warning("Listing record[%d] malformed (%s); skipping. Record=%r", idx, e, rec)
        logger.debug("Fetched %d article(s) from %s", len(articles), self.url)
        return articles
