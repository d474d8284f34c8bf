"""Request-scoped dependencies: everything handlers need lives on app.state."""

from fastapi import Request

from Data.store import RecordStore
from services.brainstorm_service import BrainstormAssistant
from services.calendar_service import CalendarProvider
from services.config import Settings
from services.search_service import WebSearch


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_brainstorm_assistant(request: Request) -> BrainstormAssistant:
    return request.app.state.brainstorm_assistant


def get_calendar_provider(request: Request) -> CalendarProvider:
    return request.app.state.calendar_provider


def get_web_search(request: Request) -> WebSearch:
    return request.app.state.web_search
