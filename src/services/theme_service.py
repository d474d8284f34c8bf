"""
Theme service: which theme applies right now.
"""

from datetime import datetime

DEFAULT_THEME = "zen-morning"


def time_slot(now: datetime) -> str:
    hour = now.hour
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def season(now: datetime) -> str:
    month = now.month
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "autumn"
    return "winter"


def resolve_theme(schedules: list[dict], manual_theme: str, now: datetime) -> dict:
    """
    Pick the theme for `now`.

    The first active schedule wins: time schedules map the time-of-day slot,
    season schedules the season; other schedule types (and unmapped slots)
    use the schedule's own currentTheme. With no usable schedule the manually
    applied theme is returned.
    """
    for schedule in schedules:
        if not schedule.get("isActive"):
            continue
        slots = schedule.get("schedule") or {}
        kind = schedule.get("type")
        theme = None
        if kind == "time":
            theme = slots.get(time_slot(now))
        elif kind == "season":
            theme = slots.get(season(now))
        theme = theme or schedule.get("currentTheme")
        if theme:
            return {"themeId": theme, "source": "schedule",
                    "scheduleId": schedule["id"]}
    return {"themeId": manual_theme or DEFAULT_THEME, "source": "manual"}
