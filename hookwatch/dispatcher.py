# hookwatch/dispatcher.py
# New-article detection against a timestamp watermark, and fire-and-forget
# delivery on a worker pool.

from __future__ import annotations
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from .utils.log import get_logger
from .watchers.base import Article

logger = get_logger("hookwatch.dispatcher")


def check_for_new(articles: Iterable[Article], watermark: float, schedule: Callable[[Article], None]) -> float:
    """Schedule every article newer than `watermark` and return the advanced watermark.

    Each article is compared with the watermark as it was when the cycle
    started, so the newest-first order only decides delivery order. An
    article stamped exactly at the watermark counts as already seen.
    The watermark moves as soon as a delivery is scheduled; a delivery that
    fails later is not retried.
    """
    seen_up_to = watermark
    for article in sorted(articles, key=lambda a: a.timestamp, reverse=True):
        if article.timestamp <= seen_up_to:
            continue
        try:
            schedule(article)
        except Exception:
            logger.exception("Could not schedule delivery for %s", article.id)
        watermark = max(watermark, article.timestamp)
    return watermark


class Dispatcher:
    """Runs notifier.send(article) on a thread pool without waiting for the result."""

    def __init__(self, notifier, max_workers: int = 8, executor: Optional[Executor] = None):
        self.notifier = notifier
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="delivery")

    def schedule(self, article: Article) -> None:
        self._executor.submit(self._deliver, article)

    def _deliver(self, article: Article) -> None:
        try:
            self.notifier.send(article)
        except Exception as e:
            logger.error("Webhook delivery failed for %s: %s", article.id, e)

    def shutdown(self, wait: bool = False, cancel_pending: bool = False) -> None:
        """Stop accepting work. Running deliveries are never interrupted; with
        cancel_pending, queued ones are dropped."""
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)
