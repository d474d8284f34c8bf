from datetime import datetime

import pytest

from services import theme_service


@pytest.mark.parametrize("hour,slot", [
    (4, "night"), (5, "morning"), (11, "morning"), (12, "afternoon"),
    (16, "afternoon"), (17, "evening"), (20, "evening"), (21, "night"),
    (0, "night"),
])
def test_time_slot(hour, slot):
    assert theme_service.time_slot(datetime(2025, 6, 1, hour)) == slot


@pytest.mark.parametrize("month,name", [
    (1, "winter"), (2, "winter"), (3, "spring"), (5, "spring"), (6, "summer"),
    (8, "summer"), (9, "autumn"), (11, "autumn"), (12, "winter"),
])
def test_season(month, name):
    assert theme_service.season(datetime(2025, month, 10)) == name


def _schedule(**fields):
    return {"id": "s1", "isActive": True, "schedule": {}, "currentTheme": "", **fields}


def test_time_schedule_picks_slot():
    schedule = _schedule(type="time", schedule={"morning": "sunrise",
                                                "night": "midnight"})
    result = theme_service.resolve_theme([schedule], "manual",
                                         datetime(2025, 6, 1, 7))
    assert result == {"themeId": "sunrise", "source": "schedule",
                      "scheduleId": "s1"}


def test_season_schedule_picks_season():
    schedule = _schedule(type="season", schedule={"winter": "frost"})
    result = theme_service.resolve_theme([schedule], "", datetime(2025, 12, 24, 9))
    assert result["themeId"] == "frost"


def test_unmapped_slot_falls_back_to_current_theme():
    schedule = _schedule(type="time", schedule={"night": "midnight"},
                         currentTheme="default-day")
    result = theme_service.resolve_theme([schedule], "", datetime(2025, 6, 1, 13))
    assert result["themeId"] == "default-day"


def test_inactive_schedules_are_skipped():
    inactive = _schedule(isActive=False, type="time",
                         schedule={"afternoon": "nope"})
    result = theme_service.resolve_theme([inactive], "forest",
                                         datetime(2025, 6, 1, 13))
    assert result == {"themeId": "forest", "source": "manual"}


def test_default_theme_without_anything():
    result = theme_service.resolve_theme([], "", datetime(2025, 6, 1, 13))
    assert result["themeId"] == theme_service.DEFAULT_THEME
