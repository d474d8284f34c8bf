"""
Collection registry: one entry per record type.

A Collection bundles everything the generic service and router need to serve
an entity: resource path, label for messages, schemas, timestamp field, list
ordering and the query-parameter filters it understands.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from Data import schemas
from Data.database import today
from Data.schemas import as_utc

Predicate = Callable[[dict, str], bool]
SortKey = Callable[[dict], Any]

MEAL_ORDER = {"breakfast": 0, "lunch": 1, "dinner": 2, "snack": 3}


def by_field(*names: str) -> SortKey:
    """Sort key over one or more fields; missing values sort as ''."""
    def key(record: dict):
        values = tuple(
            "" if record.get(name) is None else record.get(name) for name in names
        )
        return values if len(values) > 1 else values[0]
    return key


_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def by_instant(name: str) -> SortKey:
    """Sort key over an ISO-8601 datetime field, compared as instants."""
    def key(record: dict):
        value = record.get(name)
        if not value:
            return _EARLIEST
        return as_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    return key


def equals(name: str) -> Predicate:
    return lambda record, value: str(record.get(name)) == value


def date_prefix(name: str) -> Predicate:
    """Match the YYYY-MM-DD prefix of an ISO datetime field."""
    return lambda record, value: str(record.get(name) or "")[:10] == value


def unread_only(record: dict, value: str) -> bool:
    if value.lower() not in ("1", "true", "yes"):
        return True
    return not record.get("isRead")


def leaderboard_period(record: dict, value: str) -> bool:
    """`YYYY-Www` selects a week, `YYYY-MM` a month; anything else matches all."""
    if "W" in value:
        return record.get("week") == value
    if "-" in value:
        return record.get("month") == value
    return True


def learning_priority(record: dict):
    """Priority first, then when the item was queued."""
    return record.get("priority", 0), by_instant("addedAt")(record)


def meal_order(record: dict) -> int:
    return MEAL_ORDER.get(record.get("mealType"), len(MEAL_ORDER))


@dataclass(frozen=True)
class Collection:
    path: str
    label: str
    schema: type[schemas.RecordIn]
    timestamp_field: str = "createdAt"
    sort_key: SortKey | None = None
    descending: bool = False
    filters: Mapping[str, Predicate] = field(default_factory=dict)
    defaults: Mapping[str, Callable[[], str]] = field(default_factory=dict)
    routed: bool = True
    update_schema: type[schemas.RecordIn] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "update_schema",
                           schemas.partial_schema(self.schema))
        if self.sort_key is None:
            object.__setattr__(self, "sort_key",
                               by_instant(self.timestamp_field))

    @property
    def reserved_fields(self) -> set[str]:
        """Keys only the server may set."""
        return {"id", "userId", "createdAt", self.timestamp_field}


_TODAY = {"date": today}

COLLECTIONS: list[Collection] = [
    Collection("tasks", "Task", schemas.TaskIn, sort_key=by_field("order")),
    Collection("schedule", "Schedule event", schemas.ScheduleEventIn,
               sort_key=by_field("time"),
               filters={"date": equals("date")}, defaults=_TODAY),
    Collection("habits", "Habit", schemas.HabitIn),
    Collection("quick-links", "Quick link", schemas.QuickLinkIn,
               sort_key=by_field("order")),
    Collection("website-usage", "Website usage", schemas.WebsiteUsageIn,
               sort_key=by_field("timeSpentMinutes"), descending=True,
               filters={"date": equals("date")}, defaults=_TODAY),
    Collection("ai-insights", "AI insight", schemas.AIInsightIn,
               descending=True,
               filters={"date": equals("date")}, defaults=_TODAY),
    Collection("reminders", "Reminder", schemas.ReminderIn),
    Collection("goals", "Goal", schemas.GoalIn,
               filters={"type": equals("type")}),
    Collection("learning-queue", "Learning item", schemas.LearningItemIn,
               timestamp_field="addedAt",
               sort_key=learning_priority, descending=True),
    Collection("expenses", "Expense", schemas.ExpenseIn, descending=True,
               filters={
                   "startDate": lambda r, v: str(r.get("date", "")) >= v,
                   "endDate": lambda r, v: str(r.get("date", "")) <= v,
               }),
    Collection("time-tracking", "Time entry", schemas.TimeEntryIn,
               sort_key=by_instant("startTime"), descending=True,
               filters={"date": equals("date")}),
    Collection("workout-plans", "Workout plan", schemas.WorkoutPlanIn),
    Collection("workout-sessions", "Workout session", schemas.WorkoutSessionIn,
               descending=True, filters={"date": equals("date")}),
    Collection("meal-plans", "Meal plan", schemas.MealPlanIn,
               sort_key=meal_order, filters={"date": equals("date")}),
    Collection("body-care-routines", "Body care routine",
               schemas.BodyCareRoutineIn),
    Collection("skill-progress", "Skill", schemas.SkillProgressIn),
    Collection("focus-sessions", "Focus session", schemas.FocusSessionIn,
               sort_key=by_instant("startTime"), descending=True,
               filters={"date": date_prefix("startTime")}),
    Collection("leaderboard-stats", "Leaderboard stats",
               schemas.LeaderboardStatsIn, descending=True,
               filters={"period": leaderboard_period}),
    Collection("time-tables", "Time table entry", schemas.TimeTableEntryIn,
               sort_key=by_field("startTime"),
               filters={"dayOfWeek": equals("dayOfWeek")}),
    Collection("projects", "Project", schemas.ProjectIn, descending=True,
               filters={"status": equals("status")}),
    Collection("project-milestones", "Milestone", schemas.ProjectMilestoneIn,
               sort_key=by_field("order"),
               filters={"projectId": equals("projectId")}),
    Collection("subscriptions", "Subscription", schemas.SubscriptionIn,
               descending=True),
    Collection("challenges", "Challenge", schemas.ChallengeIn,
               descending=True),
    Collection("world-clocks", "World clock", schemas.WorldClockIn,
               sort_key=by_field("order")),
    Collection("web-activity", "Web activity", schemas.WebActivityIn,
               sort_key=by_instant("lastVisited"), descending=True,
               filters={"category": equals("category")}),
    Collection("anniversaries", "Anniversary", schemas.AnniversaryIn,
               sort_key=by_field("date")),
    Collection("notifications", "Notification", schemas.NotificationIn,
               descending=True, filters={"unreadOnly": unread_only}),
    Collection("social-media-posts", "Social media post",
               schemas.SocialMediaPostIn, timestamp_field="fetchedAt",
               sort_key=by_instant("publishedAt"), descending=True,
               filters={"platform": equals("platform")}),
    Collection("news-articles", "News article", schemas.NewsArticleIn,
               timestamp_field="fetchedAt",
               sort_key=by_instant("publishedAt"), descending=True,
               filters={"category": equals("category")}),
    Collection("brainstorm-sessions", "Brainstorm session",
               schemas.BrainstormSessionIn, descending=True),
    Collection("search-history", "Search history entry",
               schemas.SearchHistoryIn, timestamp_field="searchedAt",
               descending=True),
    Collection("theme-schedules", "Theme schedule", schemas.ThemeScheduleIn),
    Collection("widget-layouts", "Widget layout", schemas.WidgetLayoutIn),
    Collection("calendar-connections", "Calendar connection",
               schemas.CalendarConnectionIn),
    Collection("calendar-events", "Calendar event", schemas.CalendarEventIn,
               sort_key=by_instant("startTime"),
               filters={
                   "connectionId": equals("connectionId"),
                   "date": date_prefix("startTime"),
               }),
    # Served by the dashboard routes rather than the generic router
    Collection("settings", "Settings", schemas.UserSettingsIn, routed=False),
    Collection("widget-config", "Widget config", schemas.WidgetConfigIn,
               timestamp_field="updatedAt", sort_key=by_field("position"),
               routed=False),
    Collection("daily-summary", "Daily summary", schemas.DailySummaryIn,
               routed=False),
    Collection("daily-book", "Daily book", schemas.DailyBookIn, routed=False),
    Collection("daily-photo", "Daily photo", schemas.DailyPhotoIn,
               routed=False),
]

_BY_PATH = {c.path: c for c in COLLECTIONS}


def get_collection(path: str) -> Collection:
    """Look up a collection by resource path; KeyError if unknown."""
    return _BY_PATH[path]


def routed_collections() -> list[Collection]:
    return [c for c in COLLECTIONS if c.routed]
