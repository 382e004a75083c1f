from datetime import datetime, timezone

from notion_streak.features.widget.render import format_local_time, render_widget


def test_format_local_time_uses_display_zone():
    moment = datetime(2024, 1, 15, 17, 5, tzinfo=timezone.utc)
    assert format_local_time(moment, "America/New_York") == "12:05 PM"
    assert format_local_time(moment, "UTC") == "05:05 PM"


def test_render_widget_contains_streak_and_time():
    html = render_widget(12, datetime(2024, 7, 4, 13, 30, tzinfo=timezone.utc))
    assert '<div class="streak-number">12</div>' in html
    assert "day streak" in html
    assert "Updated: 09:30 AM" in html
    assert html.startswith("<!DOCTYPE html>")
