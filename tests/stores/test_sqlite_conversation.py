# tests/stores/test_sqlite_conversation.py
"""Tests for the SQLite conversation store."""

from datetime import timedelta

from vita.models import Conversation, Message, Sender
from vita.models.entry import utc_now
from vita.stores import ConversationStore


def make_conversation(store, owner="user-1", title="Demam"):
    conversation = Conversation(owner_id=owner, title=title)
    store.create_conversation(conversation)
    return conversation


class TestSQLiteConversationStore:
    def test_is_conversation_store(self, conversation_store):
        assert isinstance(conversation_store, ConversationStore)

    def test_create_and_get(self, conversation_store):
        conversation = make_conversation(conversation_store)

        retrieved = conversation_store.get_conversation(conversation.id, "user-1")
        assert retrieved is not None
        assert retrieved.title == "Demam"

    def test_get_is_owner_scoped(self, conversation_store):
        conversation = make_conversation(conversation_store)
        assert conversation_store.get_conversation(conversation.id, "user-2") is None

    def test_messages_in_order(self, conversation_store):
        conversation = make_conversation(conversation_store)
        question = Message(conversation_id=conversation.id, sender=Sender.USER, content="Q")
        answer = Message(conversation_id=conversation.id, sender=Sender.BOT, content="A")
        conversation_store.add_message(question)
        conversation_store.add_message(answer)

        messages = conversation_store.list_messages(conversation.id)
        assert [m.content for m in messages] == ["Q", "A"]
        assert [m.sender for m in messages] == [Sender.USER, Sender.BOT]

    def test_equal_timestamps_keep_insertion_order(self, conversation_store):
        conversation = make_conversation(conversation_store)
        now = utc_now()
        for content in ["first", "second", "third"]:
            conversation_store.add_message(
                Message(
                    conversation_id=conversation.id,
                    sender=Sender.USER,
                    content=content,
                    created_at=now,
                )
            )

        messages = conversation_store.list_messages(conversation.id)
        assert [m.content for m in messages] == ["first", "second", "third"]

    def test_add_message_bumps_updated_at(self, conversation_store):
        conversation = make_conversation(conversation_store)
        later = conversation.updated_at + timedelta(minutes=5)
        conversation_store.add_message(
            Message(
                conversation_id=conversation.id,
                sender=Sender.USER,
                content="Q",
                created_at=later,
            )
        )

        assert conversation_store.get_conversation(conversation.id, "user-1").updated_at == later

    def test_list_most_recent_first_with_counts(self, conversation_store):
        older = make_conversation(conversation_store, title="Lama")
        newer = make_conversation(conversation_store, title="Baru")
        make_conversation(conversation_store, owner="user-2", title="Orang lain")
        conversation_store.add_message(
            Message(
                conversation_id=older.id,
                sender=Sender.USER,
                content="Q",
                created_at=utc_now() + timedelta(minutes=1),
            )
        )

        summaries = conversation_store.list_conversations("user-1")

        assert [s.conversation.id for s in summaries] == [older.id, newer.id]
        assert [s.message_count for s in summaries] == [1, 0]

    def test_list_title_filter_is_case_insensitive(self, conversation_store):
        match = make_conversation(conversation_store, title="Gejala DEMAM Berdarah")
        make_conversation(conversation_store, title="Sakit kepala")

        summaries = conversation_store.list_conversations("user-1", title_contains="demam")

        assert [s.conversation.id for s in summaries] == [match.id]

    def test_update_title(self, conversation_store):
        conversation = make_conversation(conversation_store)

        updated = conversation_store.update_title(conversation.id, "user-1", "Flu")

        assert updated.title == "Flu"
        assert updated.updated_at >= conversation.updated_at
        assert conversation_store.update_title(conversation.id, "user-2", "X") is None

    def test_delete_cascades_to_messages(self, conversation_store):
        conversation = make_conversation(conversation_store)
        conversation_store.add_message(
            Message(conversation_id=conversation.id, sender=Sender.USER, content="Q")
        )

        assert conversation_store.delete_conversation(conversation.id, "user-2") is False
        assert conversation_store.delete_conversation(conversation.id, "user-1") is True
        assert conversation_store.get_conversation(conversation.id, "user-1") is None
        assert conversation_store.list_messages(conversation.id) == []
