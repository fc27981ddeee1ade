# tests/conversations/test_manager.py
"""Tests for owner-scoped conversations and chat turns."""

import pytest

from vita.exceptions import GenerationUnavailableError, InvalidInputError, NotFoundError
from vita.models import EntryDraft, Sender


@pytest.fixture
def flu_entry(repository):
    return repository.create_entry(EntryDraft(title="Flu", content="Tentang flu"))


class TestStartOrContinue:
    def test_first_turn_creates_titled_conversation(self, manager, llm_client, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        assert turn.conversation.owner_id == "user-1"
        assert turn.conversation.title == "Gejala Flu"
        assert turn.user_message.sender is Sender.USER
        assert turn.bot_message.sender is Sender.BOT
        assert turn.bot_message.content == llm_client.reply
        assert turn.answer.has_results is True

        detail = manager.get_by_id("user-1", turn.conversation.id)
        assert [(m.sender, m.content) for m in detail.messages] == [
            (Sender.USER, "Apa gejala flu?"),
            (Sender.BOT, llm_client.reply),
        ]

    def test_continue_appends_to_same_conversation(self, manager, llm_client, flu_entry):
        first = manager.start_or_continue("user-1", "Apa gejala flu?")
        second = manager.start_or_continue("user-1", "Obat flu?", first.conversation.id)

        assert second.conversation.id == first.conversation.id
        assert len(llm_client.title_calls) == 1
        assert len(manager.get_by_id("user-1", first.conversation.id).messages) == 4

    def test_is_new_forces_new_conversation(self, manager, flu_entry):
        first = manager.start_or_continue("user-1", "Apa gejala flu?")
        second = manager.start_or_continue(
            "user-1", "Obat flu?", first.conversation.id, is_new=True
        )
        assert second.conversation.id != first.conversation.id

    def test_miss_still_records_fallback_reply(self, manager, llm_client):
        turn = manager.start_or_continue("user-1", "Apa itu sakit gigi?")

        assert turn.answer.has_results is False
        assert turn.bot_message.content == turn.answer.text
        assert llm_client.answer_call_count == 0

    def test_title_failure_does_not_block_turn(self, manager, llm_client, flu_entry):
        llm_client.title_error = TimeoutError("slow")

        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        assert turn.conversation.title.startswith("Percakapan ")
        assert turn.bot_message is not None

    def test_other_owner_is_not_found(self, manager, conversation_store, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        with pytest.raises(NotFoundError):
            manager.start_or_continue("user-2", "Obat flu?", turn.conversation.id)
        assert len(conversation_store.list_messages(turn.conversation.id)) == 2

    def test_unknown_conversation_is_not_found(self, manager):
        with pytest.raises(NotFoundError, match="Conversation with ID missing not found"):
            manager.start_or_continue("user-1", "Apa gejala flu?", "missing")

    def test_generation_failure_keeps_user_message_only(
        self, manager, conversation_store, llm_client, flu_entry
    ):
        llm_client.answer_error = ConnectionError("provider down")

        with pytest.raises(GenerationUnavailableError):
            manager.start_or_continue("user-1", "Apa gejala flu?")

        (summary,) = conversation_store.list_conversations("user-1")
        messages = conversation_store.list_messages(summary.conversation.id)
        assert [m.sender for m in messages] == [Sender.USER]

    def test_empty_answer_abandons_turn(self, manager, conversation_store, llm_client, flu_entry):
        llm_client.reply = "   "

        assert manager.start_or_continue("user-1", "Apa gejala flu?") is None

        (summary,) = conversation_store.list_conversations("user-1")
        messages = conversation_store.list_messages(summary.conversation.id)
        assert [m.sender for m in messages] == [Sender.USER]

    def test_invalid_input_creates_nothing(self, manager, conversation_store, llm_client):
        with pytest.raises(InvalidInputError):
            manager.start_or_continue("user-1", "flu", temperature=5)

        assert conversation_store.list_conversations("user-1") == []
        assert llm_client.title_calls == []

    @pytest.mark.asyncio
    async def test_async_turn(self, manager, llm_client, flu_entry):
        turn = await manager.astart_or_continue("user-1", "Apa gejala flu?")

        assert turn.bot_message.content == llm_client.reply
        again = await manager.astart_or_continue("user-1", "Lagi?", turn.conversation.id)
        assert again.conversation.id == turn.conversation.id

    @pytest.mark.asyncio
    async def test_async_ownership(self, manager, flu_entry):
        turn = await manager.astart_or_continue("user-1", "Apa gejala flu?")
        with pytest.raises(NotFoundError):
            await manager.astart_or_continue("user-2", "Lagi?", turn.conversation.id)


class TestConversationQueries:
    def test_list_most_recent_first(self, manager, flu_entry):
        older = manager.start_or_continue("user-1", "Apa gejala flu?").conversation
        newer = manager.start_or_continue("user-1", "Obat flu?").conversation
        manager.start_or_continue("user-1", "Lagi?", older.id)

        summaries = manager.list_conversations("user-1")

        assert [s.conversation.id for s in summaries] == [older.id, newer.id]
        assert [s.message_count for s in summaries] == [4, 2]

    def test_list_is_owner_scoped(self, manager, flu_entry):
        manager.start_or_continue("user-1", "Apa gejala flu?")
        assert manager.list_conversations("user-2") == []

    def test_search_by_title(self, manager, llm_client, flu_entry):
        flu = manager.start_or_continue("user-1", "Apa gejala flu?").conversation
        llm_client.title = "Demam Berdarah"
        manager.start_or_continue("user-1", "Apa itu DBD?")

        results = manager.search_conversations("user-1", "gejala")

        assert [s.conversation.id for s in results] == [flu.id]

    def test_search_requires_term(self, manager):
        with pytest.raises(InvalidInputError):
            manager.search_conversations("user-1", " ")

    def test_get_by_id_other_owner(self, manager, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")
        with pytest.raises(NotFoundError):
            manager.get_by_id("user-2", turn.conversation.id)

    def test_create_conversation(self, manager):
        conversation = manager.create_conversation("user-1", "Catatan")

        detail = manager.get_by_id("user-1", conversation.id)
        assert detail.conversation.title == "Catatan"
        assert detail.messages == []


class TestConversationMutations:
    def test_rename(self, manager, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        renamed = manager.rename("user-1", turn.conversation.id, "  Flu anak  ")

        assert renamed.title == "Flu anak"
        assert manager.get_by_id("user-1", turn.conversation.id).conversation.title == "Flu anak"

    def test_rename_other_owner(self, manager, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")
        with pytest.raises(NotFoundError):
            manager.rename("user-2", turn.conversation.id, "x")

    def test_remove_cascades(self, manager, conversation_store, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        manager.remove("user-1", turn.conversation.id)

        with pytest.raises(NotFoundError):
            manager.get_by_id("user-1", turn.conversation.id)
        assert conversation_store.list_messages(turn.conversation.id) == []

    def test_remove_other_owner(self, manager, flu_entry):
        turn = manager.start_or_continue("user-1", "Apa gejala flu?")

        with pytest.raises(NotFoundError):
            manager.remove("user-2", turn.conversation.id)
        assert manager.get_by_id("user-1", turn.conversation.id)
