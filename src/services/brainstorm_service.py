"""
Brainstorm service: AI-assisted idea sessions.

The assistant is pluggable: `CannedBrainstormAssistant` answers from fixed
templates, `OllamaBrainstormAssistant` asks a local Ollama model.
"""

from abc import ABC, abstractmethod

import httpx
import structlog
from ollama import AsyncClient, ResponseError

from Data.collections import get_collection
from Data.store import RecordStore
from services import record_service
from services.errors import UpstreamError

logger = structlog.get_logger(__name__)

BRAINSTORM_SESSIONS = get_collection("brainstorm-sessions")

SESSION_TYPES = ("idea_generation", "summary", "analysis", "question")

TAG_KEYWORDS = [
    "business",
    "creative",
    "technology",
    "productivity",
    "writing",
    "marketing",
    "strategy",
]

SYSTEM_PROMPTS = {
    "idea_generation": "You generate five distinct, concrete ideas as a numbered list.",
    "summary": "You summarise the user's text as short bullet points.",
    "analysis": "You analyse the topic as strengths, challenges and recommendations.",
    "question": "You answer the user's question directly, then add practical tips.",
}
DEFAULT_SYSTEM_PROMPT = "You are a concise brainstorming partner."


def extract_tags(prompt: str) -> str:
    """Comma-separated known keywords found in the prompt."""
    lowered = prompt.lower()
    return ",".join(k for k in TAG_KEYWORDS if k in lowered)


class BrainstormAssistant(ABC):
    @abstractmethod
    async def generate(self, prompt: str, session_type: str) -> str:
        """Return the assistant's answer for a prompt."""


class CannedBrainstormAssistant(BrainstormAssistant):
    """Template answers per session type; no model involved."""

    async def generate(self, prompt: str, session_type: str) -> str:
        if session_type == "idea_generation":
            return (
                "Here are some ideas to get you started:\n\n"
                "1. **Fresh angle**: pair a modern tool with a proven routine.\n"
                "2. **Bold concept**: drop one assumption and see what remains.\n"
                "3. **User-first**: start from the experience and work back.\n"
                "4. **Community**: invite others to shape and own it.\n"
                "5. **Sustainable**: favour what still works a year from now."
            )
        if session_type == "summary":
            return (
                "**Summary**\n\n"
                f"- **Main theme**: {prompt[:50]}...\n"
                "- **Key aspects**: what drives the outcome\n"
                "- **Action items**: the practical next moves\n"
                "- **Watch out for**: constraints to keep in mind"
            )
        if session_type == "analysis":
            return (
                "**Analysis**\n\n"
                "**Strengths**\n- Clear goal\n- Existing momentum\n\n"
                "**Challenges**\n- Limited time\n- Unclear ownership\n\n"
                "**Recommendations**\n- Start small\n- Review weekly"
            )
        if session_type == "question":
            return (
                "**Answer**: start with a small, manageable step and keep the "
                "bigger picture in view.\n\n"
                "- Consider context and timing\n"
                "- Check the resources you have\n"
                "- Set a measurable goal"
            )
        return (
            "Happy to explore this further. Could you share more detail "
            "about what you're looking for?"
        )


class OllamaBrainstormAssistant(BrainstormAssistant):
    """Asks a local Ollama model."""

    def __init__(self, model: str, client: AsyncClient | None = None):
        self.model = model
        self._client = client or AsyncClient()

    async def generate(self, prompt: str, session_type: str) -> str:
        messages = [
            {
                "role": "system",
                "content": SYSTEM_PROMPTS.get(session_type, DEFAULT_SYSTEM_PROMPT),
            },
            {"role": "user", "content": prompt},
        ]
        try:
            response = await self._client.chat(model=self.model, messages=messages)
        except (ResponseError, httpx.HTTPError, ConnectionError) as e:
            logger.warning("Ollama request failed", model=self.model, error=str(e))
            raise UpstreamError("brainstorm", str(e)) from e
        return response["message"]["content"]


def build_assistant(backend: str, model: str) -> BrainstormAssistant:
    if backend == "ollama":
        return OllamaBrainstormAssistant(model)
    return CannedBrainstormAssistant()


async def generate_session(
    store: RecordStore,
    assistant: BrainstormAssistant,
    user_id: str,
    prompt: str,
    session_type: str,
) -> dict:
    """Ask the assistant and store the exchange as a brainstorm session."""
    response = await assistant.generate(prompt, session_type)
    return record_service.create_record(
        store,
        BRAINSTORM_SESSIONS,
        user_id,
        {
            "prompt": prompt,
            "response": response,
            "sessionType": session_type,
            "tags": extract_tags(prompt),
        },
    )
