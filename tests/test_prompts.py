# tests/test_prompts.py
"""Tests for grounded prompt assembly."""

from vita.models import KnowledgeEntry, SimilarityResult
from vita.prompts import (
    CONTEXT_SEPARATOR,
    DISCLAIMERS,
    NO_MATCH_MESSAGES,
    build_grounded_prompt,
    build_title_prompt,
    detect_language,
    format_context,
    no_match_message,
)


def result(title, content, source_url="", similarity=0.9):
    entry = KnowledgeEntry(title=title, content=content, source_url=source_url)
    return SimilarityResult(entry=entry, similarity=similarity)


class TestDetectLanguage:
    def test_indonesian(self):
        assert detect_language("Apa gejala demam berdarah pada anak?") == "id"

    def test_english(self):
        assert detect_language("What are the symptoms of the flu?") == "en"

    def test_tie_uses_default(self):
        assert detect_language("DBD?") == "id"
        assert detect_language("", default="en") == "en"


class TestFormatContext:
    def test_blocks_in_ranking_order(self):
        context = format_context(
            [
                result("Flu", "Infeksi virus.", "https://example.org/flu"),
                result("DBD", "Demam berdarah dengue."),
            ]
        )
        first, second = context.split(CONTEXT_SEPARATOR)
        assert first == "Title: Flu\nContent: Infeksi virus.\nSource: https://example.org/flu"
        assert second == "Title: DBD\nContent: Demam berdarah dengue.\nSource: "

    def test_empty(self):
        assert format_context([]) == ""


class TestGroundedPrompt:
    def test_contains_context_question_and_disclaimer(self):
        prompt = build_grounded_prompt("Apa itu flu?", [result("Flu", "Infeksi virus.")])
        assert prompt.startswith("You are Vita AI")
        assert "Title: Flu\nContent: Infeksi virus." in prompt
        assert "User question:\nApa itu flu?" in prompt
        assert "Use ONLY this information" in prompt
        assert DISCLAIMERS["id"] in prompt

    def test_english_disclaimer(self):
        prompt = build_grounded_prompt("What is the flu?", [result("Flu", "A virus.")])
        assert DISCLAIMERS["en"] in prompt

    def test_deterministic(self):
        results = [result("Flu", "Infeksi virus.")]
        assert build_grounded_prompt("Apa itu flu?", results) == build_grounded_prompt(
            "Apa itu flu?", results
        )


class TestFixedMessages:
    def test_no_match_follows_question_language(self):
        assert no_match_message("Apa itu kanker?") == NO_MATCH_MESSAGES["id"]
        assert no_match_message("What is cancer?") == NO_MATCH_MESSAGES["en"]

    def test_title_prompt(self):
        prompt = build_title_prompt("Apa gejala flu?")
        assert "Apa gejala flu?" in prompt
        assert "judul" in prompt
