"""Conversation management: titled, owner-scoped, multi-turn chat history."""

import asyncio
import logging
import re
from collections.abc import Callable
from datetime import date, datetime

from vita.exceptions import NotFoundError
from vita.models import (
    ChatAnswer,
    Conversation,
    ConversationDetail,
    ConversationSummary,
    Message,
    Sender,
    TurnResult,
)
from vita.models.entry import utc_now
from vita.pipeline import RAGPipeline
from vita.prompts import build_title_prompt
from vita.providers import LLMClient
from vita.stores import ConversationStore
from vita.validation import require_text

logger = logging.getLogger(__name__)

CONVERSATION = "Conversation"
UNTITLED = "untitled"

# Placeholder title prefix and date layout per locale
_FALLBACK_TITLES: dict[str, tuple[str, Callable[[date], str]]] = {
    "id-ID": ("Percakapan", lambda d: f"{d.day}/{d.month}/{d.year}"),
    "en-US": ("Conversation", lambda d: f"{d.month}/{d.day}/{d.year}"),
    "en-GB": ("Conversation", lambda d: f"{d.day:02d}/{d.month:02d}/{d.year}"),
}

_QUOTES = re.compile(r"[\"“”]")
_LABEL = re.compile(r"^(judul|title)\s*:\s*", re.IGNORECASE)


def fallback_title(today: date, locale: str = "id-ID") -> str:
    """Deterministic placeholder title used when title generation fails."""
    prefix, layout = _FALLBACK_TITLES.get(locale, ("Conversation", date.isoformat))
    return f"{prefix} {layout(today)}"


def clean_title(raw: str, max_length: int = 100) -> str:
    """Tidy a model-generated title: drop quotes, a "Judul:" label, and excess length."""
    title = _QUOTES.sub("", raw).strip().strip("*#").strip()
    title = _LABEL.sub("", title)
    title = title.splitlines()[0].strip() if title else ""
    return title[:max_length].strip() or UNTITLED


class ConversationManager:
    """Persists question/answer turns under owner-scoped, titled conversations.

    Every access checks ownership: a conversation owned by someone else is
    reported as NotFoundError, exactly like a missing one.

    A turn persists the USER message before generation. The BOT message is
    only written once a non-empty answer exists, so a failed turn leaves the
    question in history with no reply rather than a phantom one.
    """

    def __init__(
        self,
        store: ConversationStore,
        pipeline: RAGPipeline,
        llm_client: LLMClient,
        title_temperature: float = 0.7,
        title_max_tokens: int = 100,
        title_max_length: int = 100,
        locale: str = "id-ID",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the manager.

        Args:
            store: Conversation and message persistence
            pipeline: RAG pipeline that answers each turn
            llm_client: Client for the lightweight title generation call
            title_temperature: Sampling temperature for title generation
            title_max_tokens: Token cap for title generation
            title_max_length: Maximum stored title length in characters
            locale: Locale for the fallback title's date
            clock: Source of "now" for fallback titles
        """
        self.store = store
        self.pipeline = pipeline
        self._llm_client = llm_client
        self.title_temperature = title_temperature
        self.title_max_tokens = title_max_tokens
        self.title_max_length = title_max_length
        self.locale = locale
        self._clock = clock

    # Titles

    def _title_or_fallback(self, raw: str | None) -> str:
        if not raw:
            return UNTITLED
        return clean_title(raw, self.title_max_length)

    def _fallback(self, error: Exception) -> str:
        title = fallback_title(self._clock().date(), self.locale)
        logger.warning("Title generation failed (%s); using %r", error, title)
        return title

    def generate_title(self, question: str) -> str:
        """Generate a short title for a new conversation. Never raises."""
        try:
            raw = self._llm_client.complete(
                messages=[{"role": "user", "content": build_title_prompt(question)}],
                temperature=self.title_temperature,
                max_tokens=self.title_max_tokens,
            )
        except Exception as e:
            return self._fallback(e)
        return self._title_or_fallback(raw)

    async def agenerate_title(self, question: str) -> str:
        """Async version of generate_title(). Never raises."""
        try:
            raw = await self._llm_client.acomplete(
                messages=[{"role": "user", "content": build_title_prompt(question)}],
                temperature=self.title_temperature,
                max_tokens=self.title_max_tokens,
            )
        except Exception as e:
            return self._fallback(e)
        return self._title_or_fallback(raw)

    # Conversations

    def create_conversation(self, owner_id: str, title: str) -> Conversation:
        """Explicitly create an empty conversation."""
        require_text(owner_id, "owner_id")
        require_text(title, "title")
        conversation = Conversation(owner_id=owner_id, title=title[: self.title_max_length])
        self.store.create_conversation(conversation)
        logger.info("Created conversation %s for owner %s", conversation.id, owner_id)
        return conversation

    def _require_owned(self, owner_id: str, conversation_id: str) -> Conversation:
        conversation = self.store.get_conversation(conversation_id, owner_id)
        if conversation is None:
            raise NotFoundError(CONVERSATION, conversation_id)
        return conversation

    def list_conversations(self, owner_id: str) -> list[ConversationSummary]:
        """All of an owner's conversations, most recently updated first."""
        require_text(owner_id, "owner_id")
        return self.store.list_conversations(owner_id)

    def search_conversations(self, owner_id: str, term: str) -> list[ConversationSummary]:
        """Conversations whose title contains ``term`` (case-insensitive)."""
        require_text(owner_id, "owner_id")
        require_text(term, "term")
        return self.store.list_conversations(owner_id, title_contains=term.strip())

    def get_by_id(self, owner_id: str, conversation_id: str) -> ConversationDetail:
        """A conversation and all its messages, oldest first."""
        conversation = self._require_owned(owner_id, conversation_id)
        return ConversationDetail(
            conversation=conversation,
            messages=self.store.list_messages(conversation.id),
        )

    def rename(self, owner_id: str, conversation_id: str, title: str) -> Conversation:
        require_text(title, "title")
        updated = self.store.update_title(
            conversation_id, owner_id, title.strip()[: self.title_max_length]
        )
        if updated is None:
            raise NotFoundError(CONVERSATION, conversation_id)
        return updated

    def remove(self, owner_id: str, conversation_id: str) -> Conversation:
        """Delete a conversation and, with it, all of its messages."""
        conversation = self._require_owned(owner_id, conversation_id)
        if not self.store.delete_conversation(conversation_id, owner_id):
            raise NotFoundError(CONVERSATION, conversation_id)
        logger.info("Deleted conversation %s", conversation_id)
        return conversation

    # Turns

    def _finish_turn(
        self, conversation: Conversation, user_message: Message, answer: ChatAnswer
    ) -> TurnResult | None:
        if not answer.text or not answer.text.strip():
            logger.warning(
                "Empty answer in conversation %s; turn abandoned without a reply",
                conversation.id,
            )
            return None
        bot_message = Message(
            conversation_id=conversation.id, sender=Sender.BOT, content=answer.text
        )
        self.store.add_message(bot_message)
        refreshed = self.store.get_conversation(conversation.id, conversation.owner_id)
        return TurnResult(
            conversation=refreshed or conversation,
            user_message=user_message,
            bot_message=bot_message,
            answer=answer,
        )

    def start_or_continue(
        self,
        owner_id: str,
        question: str,
        conversation_id: str | None = None,
        is_new: bool = False,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> TurnResult | None:
        """Run one turn, creating the conversation first when needed.

        Args:
            owner_id: The user the conversation belongs to
            question: The user's question
            conversation_id: Existing conversation to continue
            is_new: Force a new conversation even if conversation_id is set
            limit: Retrieval limit (pipeline default if None)
            threshold: Similarity threshold (pipeline default if None)
            temperature: Generation temperature (pipeline default if None)

        Returns:
            The persisted turn, or None if generation produced no text.

        Raises:
            InvalidInputError: If an argument is out of range
            NotFoundError: If conversation_id is unknown or not owned by owner_id
            DependencyError: If retrieval or generation failed (the USER message stays)
        """
        require_text(owner_id, "owner_id")
        limit, threshold, temperature = self.pipeline.resolve_arguments(
            question, limit, threshold, temperature
        )

        if is_new or not conversation_id:
            conversation = Conversation(owner_id=owner_id, title=self.generate_title(question))
            self.store.create_conversation(conversation)
            logger.info("Created conversation %s for owner %s", conversation.id, owner_id)
        else:
            conversation = self._require_owned(owner_id, conversation_id)

        user_message = Message(
            conversation_id=conversation.id, sender=Sender.USER, content=question
        )
        self.store.add_message(user_message)

        answer = self.pipeline.answer(question, limit, threshold, temperature)
        return self._finish_turn(conversation, user_message, answer)

    async def astart_or_continue(
        self,
        owner_id: str,
        question: str,
        conversation_id: str | None = None,
        is_new: bool = False,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> TurnResult | None:
        """Async version of start_or_continue(); store calls run in worker threads."""
        require_text(owner_id, "owner_id")
        limit, threshold, temperature = self.pipeline.resolve_arguments(
            question, limit, threshold, temperature
        )

        if is_new or not conversation_id:
            title = await self.agenerate_title(question)
            conversation = Conversation(owner_id=owner_id, title=title)
            await asyncio.to_thread(self.store.create_conversation, conversation)
            logger.info("Created conversation %s for owner %s", conversation.id, owner_id)
        else:
            conversation = await asyncio.to_thread(
                self._require_owned, owner_id, conversation_id
            )

        user_message = Message(
            conversation_id=conversation.id, sender=Sender.USER, content=question
        )
        await asyncio.to_thread(self.store.add_message, user_message)

        answer = await self.pipeline.aanswer(question, limit, threshold, temperature)
        return await asyncio.to_thread(self._finish_turn, conversation, user_message, answer)
