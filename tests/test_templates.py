import random

import pytest

from hookwatch.notifiers.templates import render_payload, render_text
from hookwatch.utils.text import ELLIPSIS, compose_text, iso_utc, random_conversation_id, truncate

from conftest import article


class TestText:

    def test_compose_with_subtitle(self):
        assert compose_text("T", "S", "B") == "T — S: B"

    def test_compose_without_subtitle(self):
        assert compose_text("T", None, "B") == "T — B"
        assert compose_text("T", "", "B") == "T — B"

    def test_truncate_long_text(self):
        out = truncate("x" * 1700, 1600)
        assert out == "x" * 1600 + ELLIPSIS
        assert len(out) == 1601

    @pytest.mark.parametrize("n", [0, 1, 1599, 1600])
    def test_short_text_passes_through(self, n):
        assert truncate("y" * n, 1600) == "y" * n

    def test_zero_limit_disables_truncation(self):
        assert truncate("z" * 5000, 0) == "z" * 5000

    def test_iso_utc_has_millis_and_z(self):
        assert iso_utc(0) == "1970-01-01T00:00:00.000Z"
        assert iso_utc(1714564800) == "2024-05-01T12:00:00.000Z"

    def test_conversation_id_range(self):
        rng = random.Random(3)
        for _ in range(200):
            assert 1_000 <= random_conversation_id(rng) <= 999_999_999


class TestRenderPayload:

    def test_payload_shape(self):
        a = article("g1", 1714564800, title="BTC up", subtitle="Rally", body="Details")
        p = render_payload(a, "web article", 12345)
        assert p == {
            "timestamp": "2024-05-01T12:00:00.000Z",
            "xId": "web article",
            "conversationId": "12345",
            "tweetId": "https://news.example.test/g1",
            "text": "BTC up — Rally: Details",
        }

    def test_text_is_truncated(self):
        a = article("g2", 0, title="T", body="b" * 50)
        assert render_text(a, 10) == ("T — " + "b" * 6) + ELLIPSIS
