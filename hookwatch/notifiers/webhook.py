import random

import requests

from .templates import render_payload
from ..net import post_json
from ..utils.log import get_logger
from ..utils.text import random_conversation_id
from ..watchers.base import Article

logger = get_logger("hookwatch.webhook")


class WebhookNotifier:
    """POST one JSON notification per article to a fixed URL."""

    def __init__(
        self,
        session: requests.Session,
        url: str,
        source_tag: str = "web article",
        max_chars: int = 1600,
        dry_run: bool = False,
        rng: random.Random | None = None,
    ):
        self.session = session
        self.url = url
        self.source_tag = source_tag
        self.max_chars = max_chars
        self.dry_run = dry_run
        self.rng = rng

    def build(self, article: Article) -> dict:
        return render_payload(
            article,
            self.source_tag,
            random_conversation_id(self.rng),
            self.max_chars,
        )

    def send(self, article: Article) -> bool:
        """Deliver one article; raises TransportError when the webhook rejects or is unreachable."""
        payload = self.build(article)
        if self.dry_run:
            logger.info("[DRY RUN] Would send webhook for %s: %s", article.id, payload)
            return True
        logger.info("Webhook payload: %s", payload)
        post_json(self.session, self.url, payload)
        logger.info("Sent webhook for %s", article.id)
        return True
