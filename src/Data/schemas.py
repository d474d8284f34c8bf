"""
Request schemas for every record type.

Attributes are snake_case; the wire format is camelCase. Each model describes
what a client may send on create. Update models are derived with
`partial_schema`: same fields and constraints, all optional.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    create_model,
)
from pydantic.alias_generators import to_camel

from Data.database import utcnow

Percent = Annotated[int, Field(ge=0, le=100)]
Stars = Annotated[int, Field(ge=1, le=5)]
Cents = Annotated[int, Field(ge=0)]
Minutes = Annotated[int, Field(ge=0)]


def as_utc(value: datetime) -> datetime:
    """Convert to UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Stored the same way as server timestamps: ISO-8601 with a +00:00 offset
UtcDatetime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(lambda value: value.isoformat(), return_type=str,
                    when_used="json"),
]


class RecordIn(BaseModel):
    """Base for record payloads; unknown keys (userId included) are dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class LooseRecordIn(RecordIn):
    """Base for free-form records that keep whatever extra keys they receive."""

    model_config = ConfigDict(extra="allow")


def partial_schema(model: type[RecordIn]) -> type[RecordIn]:
    """Derive an update model where every field is optional but still typed."""
    fields: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[name] = (annotation, None)
    return create_model(
        f"{model.__name__}Update", __base__=model.__bases__[0], **fields
    )


# --------------------------------------------------------------------------- #
# Core widgets
# --------------------------------------------------------------------------- #

class TaskIn(RecordIn):
    text: str
    completed: bool = False
    order: int = 0


class ScheduleEventIn(RecordIn):
    title: str
    time: str
    date: str
    completed: bool = False


class HabitIn(RecordIn):
    name: str
    icon: str = "📝"
    streak: int = Field(default=0, ge=0)
    last_completed: str = ""


class QuickLinkIn(RecordIn):
    name: str
    url: str
    icon: str = "🔗"
    order: int = 0


class WebsiteUsageIn(RecordIn):
    date: str
    domain: str
    title: str
    time_spent_minutes: Minutes = 0
    visit_count: int = Field(default=1, ge=0)
    category: str = "other"


class AIInsightIn(RecordIn):
    date: str
    insight: str
    category: str
    severity: str = "info"
    actionable: bool = True


class ReminderIn(RecordIn):
    type: str
    title: str
    interval: int = Field(gt=0)
    is_active: bool = True
    last_triggered: UtcDatetime | None = None
    next_due: UtcDatetime | None = None


class GoalIn(RecordIn):
    title: str
    description: str = ""
    type: str
    status: str = "active"
    progress: Percent = 0
    target_value: int = 1
    current_value: int = 0
    unit: str = ""
    deadline: str


class LearningItemIn(RecordIn):
    type: str
    title: str
    url: str
    description: str = ""
    category: str = "general"
    estimated_time: Minutes = 0
    status: str = "pending"
    progress: Percent = 0
    priority: Stars = 3
    completed_at: UtcDatetime | None = None


class ExpenseIn(RecordIn):
    amount: Cents
    currency: str = "USD"
    category: str
    description: str
    date: str
    payment_method: str = "cash"
    tags: str = ""
    is_recurring: bool = False


class TimeEntryIn(RecordIn):
    activity: str
    category: str
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    duration: Minutes = 0
    date: str
    description: str = ""


# --------------------------------------------------------------------------- #
# Health & routines
# --------------------------------------------------------------------------- #

class WorkoutPlanIn(RecordIn):
    name: str
    type: str
    difficulty: str = "beginner"
    duration: Minutes
    exercises: str
    is_active: bool = True


class WorkoutSessionIn(RecordIn):
    plan_id: str | None = None
    date: str
    duration: Minutes
    exercises: str
    notes: str = ""
    rating: Stars = 3


class MealPlanIn(RecordIn):
    date: str
    meal_type: str
    name: str
    ingredients: str
    calories: int = Field(default=0, ge=0)
    protein: int = Field(default=0, ge=0)
    carbs: int = Field(default=0, ge=0)
    fat: int = Field(default=0, ge=0)
    is_completed: bool = False
    notes: str = ""


class BodyCareRoutineIn(RecordIn):
    name: str
    type: str
    time_of_day: str
    steps: str
    is_active: bool = True
    last_completed: str = ""
    streak: int = Field(default=0, ge=0)


class SkillProgressIn(RecordIn):
    skill_name: str
    category: str
    current_level: str = "beginner"
    target_level: str = "intermediate"
    progress_percentage: Percent = 0
    time_spent_minutes: Minutes = 0
    milestones: str = "[]"
    resources: str = "[]"
    last_practiced: str = ""


# --------------------------------------------------------------------------- #
# Focus & planning
# --------------------------------------------------------------------------- #

class FocusSessionIn(RecordIn):
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    duration: Minutes = 0
    actual_duration: Minutes = 0
    blocked_sites: str = "[]"
    session_type: str = "deep_work"
    is_active: bool = False
    completion_rate: Percent = 0


class LeaderboardStatsIn(RecordIn):
    week: str
    month: str
    tasks_completed: int = 0
    focus_time_minutes: Minutes = 0
    workout_sessions: int = 0
    learning_time_minutes: Minutes = 0
    habits_completed: int = 0
    productivity_score: int = 0


class TimeTableEntryIn(RecordIn):
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    title: str
    description: str = ""
    color: str = "#3b82f6"
    is_recurring: bool = True


class ProjectIn(RecordIn):
    name: str
    description: str = ""
    status: str = "active"
    priority: str = "medium"
    start_date: str
    deadline: str
    progress: Percent = 0
    tags: str = ""


class ProjectMilestoneIn(RecordIn):
    project_id: str
    title: str
    description: str = ""
    due_date: str
    is_completed: bool = False
    completed_at: UtcDatetime | None = None
    order: int = 0


class SubscriptionIn(RecordIn):
    name: str
    description: str = ""
    cost: Cents
    currency: str = "USD"
    billing_cycle: str
    next_billing_date: str
    category: str = "other"
    is_active: bool = True
    url: str = ""
    notes: str = ""


class ChallengeIn(RecordIn):
    title: str
    description: str
    category: str
    duration: int = Field(default=30, gt=0)
    start_date: str
    end_date: str
    status: str = "active"
    current_day: int = Field(default=1, ge=1)
    completed_days: str = "[]"
    rules: str = "[]"
    reward: str = ""


class WorldClockIn(RecordIn):
    city_name: str
    timezone: str
    display_name: str
    order: int = 0


class WebActivityIn(RecordIn):
    url: str
    title: str
    domain: str
    visit_count: int = Field(default=1, ge=0)
    last_visited: UtcDatetime = Field(default_factory=utcnow)
    total_time_spent: int = Field(default=0, ge=0)
    favicon: str = ""
    category: str = "other"


class AnniversaryIn(RecordIn):
    name: str
    relationship: str = ""
    event_type: str
    date: str = Field(pattern=r"^\d{2}-\d{2}$")
    year: int | None = None
    notes: str = ""
    reminder_days: int = Field(default=7, ge=0)
    is_active: bool = True


# --------------------------------------------------------------------------- #
# Feeds, notifications & assistants
# --------------------------------------------------------------------------- #

class NotificationIn(RecordIn):
    title: str
    message: str
    type: str
    source: str = "system"
    priority: str = "normal"
    is_read: bool = False
    action_url: str = ""
    metadata: str = "{}"


class SocialMediaPostIn(RecordIn):
    platform: str
    post_id: str
    author: str
    author_handle: str = ""
    content: str
    link: str = ""
    image_url: str = ""
    likes: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)
    published_at: UtcDatetime


class NewsArticleIn(RecordIn):
    title: str
    description: str = ""
    url: str
    source: str
    category: str = "general"
    image_url: str = ""
    published_at: UtcDatetime


class BrainstormSessionIn(RecordIn):
    prompt: str
    response: str
    session_type: str
    tags: str = ""
    is_favorited: bool = False


class SearchHistoryIn(RecordIn):
    query: str
    search_engine: str = "google"
    result_count: int = Field(default=0, ge=0)
    clicked_results: str = "[]"


class ThemeScheduleIn(LooseRecordIn):
    name: str
    type: str = "time"
    is_active: bool = False
    schedule: dict[str, Any] = Field(default_factory=dict)
    current_theme: str = ""


class WidgetLayoutIn(LooseRecordIn):
    name: str
    description: str = ""
    is_default: bool = False
    is_favorite: bool = False
    layout: dict[str, Any] = Field(default_factory=dict)


class CalendarConnectionIn(RecordIn):
    provider: str
    account_name: str
    is_connected: bool = True
    last_sync: UtcDatetime | None = None
    sync_status: str = "connected"
    events_count: int = Field(default=0, ge=0)


class CalendarEventIn(RecordIn):
    connection_id: str | None = None
    title: str
    description: str = ""
    start_time: UtcDatetime
    end_time: UtcDatetime
    location: str = ""
    attendees: list[str] = Field(default_factory=list)
    provider: str = ""
    calendar_name: str = ""
    is_all_day: bool = False
    status: str = "confirmed"


# --------------------------------------------------------------------------- #
# Per-user singletons and per-date records
# --------------------------------------------------------------------------- #

class UserSettingsIn(RecordIn):
    user_name: str = "Friend"
    daily_focus: str = ""
    quick_notes: str = ""
    background_image: str = ""
    panel_visibility: str = "{}"
    segment_visibility: str = "{}"
    show_dummy_data: bool = True
    current_layout: str = "comprehensive-all"
    current_theme: str = ""


class WidgetConfigIn(RecordIn):
    widget_type: str
    is_visible: bool = True
    position: int = Field(default=0, ge=0)
    size: str = "medium"
    settings: str = "{}"


class DailySummaryIn(RecordIn):
    date: str
    tasks_completed: int = Field(default=0, ge=0)
    total_tasks: int = Field(default=0, ge=0)
    focus_time_minutes: Minutes = 0
    habits_completed: int = Field(default=0, ge=0)
    total_habits: int = Field(default=0, ge=0)
    productivity_score: Percent = 0


class DailyBookIn(RecordIn):
    date: str
    title: str
    author: str
    summary: str
    key_takeaway: str
    genre: str
    cover_url: str | None = None


class DailyPhotoIn(LooseRecordIn):
    date: str
    url: str = ""
    title: str = ""
    description: str = ""
    photographer: str = ""
    source: str = ""
