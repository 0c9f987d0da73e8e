"""Tests for timestamp marker click handling."""

import gc

from bs4 import BeautifulSoup

from vlsync.dispatcher import BOUND_ATTR, ClickEvent, TimestampClickDispatcher
from vlsync.host import RecordingNotifier

BILIBILI_SRC = "https://player.bilibili.com/player.html?bvid=BV1xy&page=1"


def _render(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


def _reading_view(src: str = BILIBILI_SRC, seconds: str = "90") -> BeautifulSoup:
    return _render(
        '<div class="markdown-reading-view">'
        '<div class="vls-video-container">'
        f'<iframe class="vls-video-iframe" src="{src}"></iframe>'
        "</div>"
        f'<ul><li><span class="vls-ts" data-vls-seconds="{seconds}">[01:30]</span> intro</li></ul>'
        "</div>"
    )


def _iframe_src(soup: BeautifulSoup) -> str:
    return soup.select_one("iframe.vls-video-iframe")["src"]


class TestBinding:
    """Markers are bound once per element."""

    def test_process_binds_markers(self):
        soup = _render(
            '<p><span class="vls-ts" data-vls-seconds="1">[00:01]</span></p>'
            '<p><span class="vls-ts" data-vls-seconds="2">[00:02]</span></p>'
        )
        dispatcher = TimestampClickDispatcher(RecordingNotifier())

        assert dispatcher.process(soup) == 2
        for marker in soup.select(".vls-ts"):
            assert marker[BOUND_ATTR] == "1"
            assert dispatcher.is_bound(marker)

    def test_repeated_passes_do_not_rebind(self):
        soup = _reading_view()
        dispatcher = TimestampClickDispatcher(RecordingNotifier())

        assert dispatcher.process(soup) == 1
        assert dispatcher.process(soup) == 0

    def test_fresh_render_starts_unbound(self):
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(_reading_view())

        rerendered = _reading_view()
        marker = rerendered.select_one(".vls-ts")
        assert not dispatcher.is_bound(marker)
        assert dispatcher.process(rerendered) == 1

    def test_discarded_renders_are_released(self):
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        for _ in range(200):
            dispatcher.process(_render('<span class="vls-ts" data-vls-seconds="1">x</span>'))

        live = _reading_view()
        dispatcher.process(live)
        gc.collect()

        assert dispatcher.bound_count() == 1
        assert dispatcher.is_bound(live.select_one(".vls-ts"))

    def test_unbound_marker_ignores_clicks(self):
        soup = _reading_view()
        dispatcher = TimestampClickDispatcher(RecordingNotifier())

        event = dispatcher.click(soup.select_one(".vls-ts"))
        assert not event.default_prevented
        assert _iframe_src(soup) == BILIBILI_SRC


class TestClick:
    """Clicking a bound marker seeks the player."""

    def test_click_sets_bilibili_offset(self):
        soup = _reading_view()
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        event = dispatcher.click(soup.select_one(".vls-ts"))

        assert event.default_prevented
        assert event.propagation_stopped
        assert _iframe_src(soup) == BILIBILI_SRC + "&t=90"

    def test_click_on_malformed_player_query(self):
        soup = _reading_view(src="https://player.bilibili.com/player.html?bvid=BV1xy?page=1")
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        assert _iframe_src(soup) == (
            "https://player.bilibili.com/player.html?bvid=BV1xy?page=1&t=90"
        )

    def test_click_sets_youtube_start(self):
        soup = _reading_view(src="https://www.youtube.com/embed/abc123?rel=0&amp;controls=1")
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        assert _iframe_src(soup) == "https://www.youtube.com/embed/abc123?rel=0&controls=1&start=90"

    def test_clicks_replace_previous_offset(self):
        soup = _render(
            '<div class="markdown-preview-view">'
            f'<iframe class="vls-video-iframe" src="{BILIBILI_SRC}"></iframe>'
            '<span class="vls-ts" data-vls-seconds="10">[00:10]</span>'
            '<span class="vls-ts" data-vls-seconds="20">[00:20]</span>'
            "</div>"
        )
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)
        first, second = soup.select(".vls-ts")

        dispatcher.click(first)
        dispatcher.click(second)
        assert _iframe_src(soup) == BILIBILI_SRC + "&t=20"

    def test_player_in_same_reading_view_is_used(self):
        soup = _render(
            '<div class="markdown-reading-view">'
            '<iframe class="vls-video-iframe" src="https://example.com/a"></iframe>'
            "</div>"
            '<div class="markdown-reading-view">'
            '<iframe class="vls-video-iframe" src="https://example.com/b"></iframe>'
            '<span class="vls-ts" data-vls-seconds="5">[00:05]</span>'
            "</div>"
        )
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        srcs = [iframe["src"] for iframe in soup.select("iframe")]
        assert srcs == ["https://example.com/a", "https://example.com/b?t=5"]

    def test_falls_back_to_whole_document(self):
        soup = _render(
            f'<iframe class="vls-video-iframe" src="{BILIBILI_SRC}"></iframe>'
            '<div><span class="vls-ts" data-vls-seconds="7">[00:07]</span></div>'
        )
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        assert _iframe_src(soup) == BILIBILI_SRC + "&t=7"

    def test_same_offset_leaves_source_alone(self):
        src = BILIBILI_SRC + "&t=90"
        soup = _reading_view(src=src)
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        assert _iframe_src(soup) == src

    def test_missing_player_is_reported(self):
        soup = _render('<div><span class="vls-ts" data-vls-seconds="3">[00:03]</span></div>')
        notifier = RecordingNotifier()
        dispatcher = TimestampClickDispatcher(notifier)
        dispatcher.process(soup)

        event = dispatcher.click(soup.select_one(".vls-ts"))
        assert event.default_prevented
        assert notifier.messages == [
            ("error", "No video player (vls-video-iframe) found on this page.")
        ]

    def test_invalid_seconds_are_reported(self):
        for seconds in ("abc", "-4", "1.5"):
            soup = _reading_view(seconds=seconds)
            notifier = RecordingNotifier()
            dispatcher = TimestampClickDispatcher(notifier)
            dispatcher.process(soup)

            dispatcher.click(soup.select_one(".vls-ts"), ClickEvent())
            assert notifier.messages == [("error", "Invalid timestamp.")]
            assert _iframe_src(soup) == BILIBILI_SRC

    def test_missing_seconds_attribute_means_zero(self):
        soup = _render(
            f'<iframe class="vls-video-iframe" src="{BILIBILI_SRC}"></iframe>'
            '<span class="vls-ts">[00:00]</span>'
        )
        dispatcher = TimestampClickDispatcher(RecordingNotifier())
        dispatcher.process(soup)

        dispatcher.click(soup.select_one(".vls-ts"))
        assert _iframe_src(soup) == BILIBILI_SRC + "&t=0"
