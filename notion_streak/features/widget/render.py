"""HTML widget for embedding the current streak (e.g. in a Notion page)."""

from datetime import datetime
from html import escape
from string import Template
from zoneinfo import ZoneInfo

WIDGET_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Current Streak</title>
    <style>
        body {
            background: transparent;
            margin: 0;
            padding: 10px;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Oxygen,
                Ubuntu, Cantarell, "Open Sans", "Helvetica Neue", sans-serif;
            color: #28a745;
            text-align: center;
        }
        .streak-widget {
            background: #121212;
            border-radius: 12px;
            padding: 20px;
            border: 1px solid #444;
            max-width: 200px;
            margin: 0 auto;
        }
        .streak-number {
            font-size: 3rem;
            font-weight: bold;
            margin: 0;
        }
        .streak-label {
            color: #888;
            font-size: 0.9rem;
            margin-top: 5px;
        }
        .last-updated {
            color: #666;
            font-size: 0.7rem;
            margin-top: 10px;
        }
    </style>
</head>
<body>
    <div class="streak-widget">
        <div class="streak-number">$streak</div>
        <div class="streak-label">day streak</div>
        <div class="last-updated">Updated: $updated</div>
    </div>
</body>
</html>
""")


def format_local_time(moment: datetime, tz_name: str) -> str:
    """Hour:minute in the display zone, 12-hour clock (e.g. "09:05 PM")."""
    return moment.astimezone(ZoneInfo(tz_name)).strftime("%I:%M %p")


def render_widget(streak: int, updated_at: datetime, tz_name: str = "America/New_York") -> str:
    return WIDGET_TEMPLATE.substitute(
        streak=int(streak),
        updated=escape(format_local_time(updated_at, tz_name)),
    )
