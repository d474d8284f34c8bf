"""
Seed service: first-run defaults and optional sample records.
"""

import json
from datetime import timedelta

import structlog

from Data.collections import get_collection
from Data.database import utcnow
from Data.store import RecordStore
from services import dashboard_service, record_service

logger = structlog.get_logger(__name__)

# Widget types in default order; the first VISIBLE_WIDGETS start visible.
DEFAULT_WIDGETS = [
    "personal-greeting", "time-display", "daily-quote", "main-focus",
    "todo-widget", "schedule-widget", "habits-widget", "pomodoro-widget",
    "quick-access-widget", "notes-widget", "weather-widget",
    "reminders-widget", "goals-widget", "learning-queue-widget",
    "expenses-widget", "time-tracking-widget", "workout-widget",
    "meal-plan-widget", "body-care-widget", "skill-tracker-widget",
    "focus-mode-widget", "leaderboard-widget",
]
VISIBLE_WIDGETS = 12

PANELS = [
    "todo", "schedule", "todaySummary", "reminders", "goals", "timeTracking",
    "habits", "pomodoro", "quickAccess", "leaderboard", "learningQueue",
    "dailyBook", "workout", "expenses", "aiCoach", "websiteUsage", "weather",
    "notes", "timeTable", "bodyCare", "mealPlanner", "focusMode",
    "projectTracker", "subscriptions", "challenge", "aiBrainstorm",
    "internetSearch", "worldClock", "webActivity", "anniversaries",
    "notificationCenter", "socialMediaHub", "newsFeed", "themeScheduler",
    "widgetLayouts", "dailyPhoto",
]
SEGMENTS = [
    "timeDisplay", "dateDisplay", "personalGreeting", "searchWidget",
    "dailyQuote", "mainFocus",
]


def default_settings() -> dict:
    return {
        "userName": "Alex",
        "panelVisibility": json.dumps({p: True for p in PANELS}),
        "segmentVisibility": json.dumps({s: True for s in SEGMENTS}),
        "showDummyData": True,
    }


def sample_records(today: str, now) -> dict[str, list[dict]]:
    """Sample payloads per collection path for a fresh dashboard."""
    in_a_week = (now + timedelta(days=7)).date().isoformat()
    return {
        "schedule": [
            {"title": "Team meeting", "time": "10:00", "date": today},
        ],
        "habits": [
            {"name": "Morning meditation", "icon": "🧘", "streak": 3},
        ],
        "quick-links": [
            {"name": "Gmail", "url": "https://gmail.com", "icon": "📧"},
        ],
        "daily-summary": [
            {"date": today, "tasksCompleted": 2, "totalTasks": 5,
             "focusTimeMinutes": 75, "habitsCompleted": 3, "totalHabits": 4,
             "productivityScore": 78},
        ],
        "daily-book": [
            {"date": today, "title": "Atomic Habits", "author": "James Clear",
             "summary": "Building good habits and breaking bad ones through "
                        "small, consistent changes.",
             "keyTakeaway": "Focus on systems rather than goals.",
             "genre": "Self-Help"},
        ],
        "website-usage": [
            {"date": today, "domain": "youtube.com", "title": "YouTube",
             "timeSpentMinutes": 45, "visitCount": 8,
             "category": "entertainment"},
            {"date": today, "domain": "github.com", "title": "GitHub",
             "timeSpentMinutes": 120, "visitCount": 15, "category": "work"},
            {"date": today, "domain": "twitter.com", "title": "Twitter",
             "timeSpentMinutes": 25, "visitCount": 12, "category": "social"},
        ],
        "ai-insights": [
            {"date": today, "category": "focus", "severity": "warning",
             "insight": "45 minutes on YouTube today. Try a site blocker "
                        "during work hours."},
            {"date": today, "category": "habits", "actionable": False,
             "insight": "Three days of meditation in a row. Keep it going!"},
            {"date": today, "category": "productivity", "actionable": False,
             "insight": "Productivity score is 78% today, on track for the "
                        "week."},
        ],
        "reminders": [
            {"type": "water_intake", "title": "Drink water 💧", "interval": 60,
             "nextDue": (now + timedelta(minutes=60)).isoformat()},
            {"type": "stretch_break", "title": "Take a stretch break 🧘",
             "interval": 90,
             "nextDue": (now + timedelta(minutes=90)).isoformat()},
        ],
        "goals": [
            {"title": "Complete 5 tasks", "type": "daily", "progress": 40,
             "targetValue": 5, "currentValue": 2, "unit": "tasks",
             "deadline": today},
            {"title": "Exercise 4 times", "type": "weekly", "progress": 50,
             "targetValue": 4, "currentValue": 2, "unit": "workouts",
             "deadline": in_a_week},
        ],
        "learning-queue": [
            {"type": "podcast", "title": "How to Build Habits",
             "url": "https://example.com/podcast", "category": "productivity",
             "estimatedTime": 60, "priority": 4},
            {"type": "article", "title": "Deep Work Principles",
             "url": "https://example.com/deep-work", "category": "focus",
             "estimatedTime": 15, "status": "in_progress", "progress": 60,
             "priority": 5},
        ],
        "expenses": [
            {"amount": 1250, "category": "food",
             "description": "Lunch at local cafe", "date": today,
             "paymentMethod": "card", "tags": "restaurant,lunch"},
            {"amount": 4999, "category": "health",
             "description": "Monthly gym membership", "date": today,
             "paymentMethod": "card", "tags": "fitness,recurring",
             "isRecurring": True},
        ],
        "workout-plans": [
            {"name": "Morning Strength Training", "type": "strength",
             "difficulty": "intermediate", "duration": 45,
             "exercises": json.dumps([
                 {"name": "Push-ups", "sets": 3, "reps": 15},
                 {"name": "Squats", "sets": 3, "reps": 20},
             ])},
        ],
        "meal-plans": [
            {"date": today, "mealType": "breakfast",
             "name": "Overnight Oats with Berries",
             "ingredients": json.dumps(["oats", "milk", "berries"]),
             "calories": 350, "protein": 12, "carbs": 45, "fat": 8,
             "isCompleted": True},
            {"date": today, "mealType": "lunch", "name": "Quinoa Buddha Bowl",
             "ingredients": json.dumps(["quinoa", "chickpeas", "avocado"]),
             "calories": 520, "protein": 18, "carbs": 62, "fat": 20},
        ],
    }


def seed(store: RecordStore, user_id: str, with_samples: bool = True) -> bool:
    """
    Give a new user settings and widget configuration.

    Does nothing when the user already has settings, so it is safe to call on
    every start against a persistent store. Returns True if it seeded.
    """
    if dashboard_service.get_settings(store, user_id) is not None:
        return False

    dashboard_service.ensure_settings(store, user_id, **default_settings())
    widget_config = get_collection("widget-config")
    for position, widget_type in enumerate(DEFAULT_WIDGETS):
        record_service.create_record(store, widget_config, user_id, {
            "widgetType": widget_type,
            "isVisible": position < VISIBLE_WIDGETS,
            "position": position,
        })

    count = 0
    if with_samples:
        now = utcnow()
        for path, payloads in sample_records(now.date().isoformat(), now).items():
            collection = get_collection(path)
            for payload in payloads:
                record_service.create_record(store, collection, user_id, payload)
                count += 1

    logger.info("Seeded store", user_id=user_id, widgets=len(DEFAULT_WIDGETS),
                samples=count)
    return True
