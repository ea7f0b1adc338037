# hookwatch/main.py
# Entry point: prime the watermark → every POLL_SECONDS fetch the listing,
# schedule a webhook for each article newer than the watermark.

from __future__ import annotations
import sys
import time
from typing import Callable, Optional

from . import config
from .config import ConfigError
from .dispatcher import Dispatcher, check_for_new
from .net import RateLimited, TransportError, make_session
from .notifiers.webhook import WebhookNotifier
from .utils.keys import KeyPool
from .utils.log import get_logger
from .watchers.article_list import ArticleFields, ArticleListWatcher
from .watchers.base import Watcher

logger = get_logger("hookwatch")


def _log_fetch_error(e: TransportError) -> None:
    if isinstance(e, RateLimited):
        logger.warning("Rate limit hit! Increase POLL_SECONDS (currently %ss).", config.POLL_SECONDS)
    else:
        logger.error("Error checking for new articles: %s", e)


def prime_watermark(watcher: Watcher) -> Optional[float]:
    """Watermark from the current listing, or None if the fetch failed."""
    try:
        articles = watcher.fetch_latest()
    except TransportError as e:
        _log_fetch_error(e)
        return None
    return max((a.timestamp for a in articles), default=0)


def run_cycle(watcher: Watcher, dispatcher: Dispatcher, watermark: Optional[float]) -> Optional[float]:
    """One fetch-then-dispatch pass. Returns the watermark for the next cycle.

    A None watermark means startup priming has not succeeded yet; this cycle
    primes instead of delivering.
    """
    if watermark is None:
        return prime_watermark(watcher)
    try:
        articles = watcher.fetch_latest()
    except TransportError as e:
        _log_fetch_error(e)
        return watermark
    return check_for_new(articles, watermark, dispatcher.schedule)


def run_forever(
    watcher: Watcher,
    dispatcher: Dispatcher,
    interval: float,
    send_on_startup: bool = False,
    max_cycles: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Optional[float]:
    """Fixed-cadence loop. max_cycles bounds the loop (tests); None runs until interrupted."""
    logger.info("Watching for new articles every %ss…", interval)
    watermark: Optional[float] = None
    try:
        if send_on_startup:
            watermark = run_cycle(watcher, dispatcher, 0)
        else:
            watermark = prime_watermark(watcher)
            if watermark is not None:
                logger.info("Starting watermark: %s", watermark)
    except Exception:
        # Unprimed: the first loop cycle primes instead of delivering.
        logger.exception("Startup fetch failed; continuing")

    cycles = 0
    next_at = clock() + interval
    while max_cycles is None or cycles < max_cycles:
        delay = next_at - clock()
        if delay > 0:
            sleep(delay)
        next_at = max(next_at + interval, clock())
        try:
            watermark = run_cycle(watcher, dispatcher, watermark)
        except Exception:
            logger.exception("Cycle failed; continuing")
        cycles += 1
    return watermark


def build(keys) -> tuple[ArticleListWatcher, Dispatcher]:
    session = make_session(pool_size=max(config.DELIVERY_WORKERS, 1) + 1)
    watcher = ArticleListWatcher(
        session,
        config.ARTICLE_API_URL,
        KeyPool(keys),
        limit=config.ARTICLE_LIMIT,
        lang=config.ARTICLE_LANG,
        list_field=config.ARTICLE_LIST_FIELD,
        key_header=config.API_KEY_HEADER,
        fields=ArticleFields(timestamp=config.ARTICLE_TIMESTAMP_FIELD),
    )
    notifier = WebhookNotifier(
        session,
        config.WEBHOOK_URL,
        source_tag=config.WEBHOOK_SOURCE_TAG,
        max_chars=config.MAX_TEXT_CHARS,
        dry_run=config.DRY_RUN,
    )
    return watcher, Dispatcher(notifier, max_workers=config.DELIVERY_WORKERS)


def main() -> None:
    try:
        keys = config.api_keys()
        config.require_webhook_url()
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    watcher, dispatcher = build(keys)
    logger.info("Using %d API key(s); DRY_RUN=%s", len(keys), config.DRY_RUN)
    try:
        run_forever(watcher, dispatcher, config.POLL_SECONDS, send_on_startup=config.SEND_ON_STARTUP)
    except KeyboardInterrupt:
        logger.info("Interrupted; queued deliveries dropped, in-flight ones finish or time out.")
    finally:
        dispatcher.shutdown(wait=False, cancel_pending=True)


if __name__ == "__main__":
    main()
