"""Grounded prompt assembly.

Everything in this module is pure: no I/O, no provider calls. The same
question and ranked results always produce the same prompt.
"""

import re
from collections.abc import Sequence
from typing import Literal

from vita.models import SimilarityResult

Language = Literal["id", "en"]

CONTEXT_SEPARATOR = "\n\n---\n\n"

DISCLAIMERS: dict[Language, str] = {
    "id": (
        "⚠️ Informasi ini hanya untuk tujuan edukasi dan bukan pengganti saran medis "
        "profesional. Silakan konsultasikan dengan tenaga medis untuk arahan yang lebih tepat."
    ),
    "en": (
        "⚠️ This information is for educational purposes only and is not a substitute for "
        "professional medical advice. Please consult a healthcare professional for proper "
        "guidance."
    ),
}

NO_MATCH_MESSAGES: dict[Language, str] = {
    "id": (
        "Maaf, saya tidak dapat menemukan informasi yang relevan untuk menjawab pertanyaan "
        "Anda. Silakan coba dengan pertanyaan yang lebih spesifik atau konsultasikan dengan "
        "tenaga medis profesional."
    ),
    "en": (
        "Sorry, I could not find relevant information to answer your question. Please try a "
        "more specific question or consult a healthcare professional."
    ),
}

GROUNDED_PROMPT = """You are Vita AI, a helpful medical assistant.

The following is retrieved knowledge from the database (RAG results).
Use ONLY this information to answer the question.

Retrieved context:
\"\"\"
{context}
\"\"\"

User question:
{question}

Instructions:
- Answer the user in the SAME language as the user question (if user asks in Indonesian, answer in Indonesian; if in English, answer in English).
- Summarize clearly, structured with sections when applicable: Definition, Causes, Symptoms, Diagnosis, Treatment, Outlook.
- If the user gives symptoms, suggest possible related conditions based on the retrieved context.
- If information is not found in the retrieved context, say so clearly.
- Always end with this disclaimer:
  "{disclaimer}\""""  # noqa: E501

TITLE_PROMPT = """buatkan satu judul untuk conversation dengan prompt berikut
{question}
berikan contoh satu saja dan langsung ke judulnya, judulnya jangan pakai tanda titik dua (:)"""

# Common Indonesian function words; enough to tell Indonesian from English questions
_INDONESIAN_MARKERS = frozenset(
    {
        "saya", "aku", "anda", "kamu", "apa", "apakah", "bagaimana", "mengapa", "kenapa",
        "yang", "dan", "atau", "tidak", "bukan", "dengan", "untuk", "dari", "pada", "ini",
        "itu", "ada", "sakit", "demam", "batuk", "gejala", "penyakit", "obat", "sudah",
        "sering", "bisa", "harus", "karena", "jika", "kalau", "sejak", "hari", "kepala",
        "perut", "badan", "punya", "mengalami", "terasa", "merasa", "berapa", "siapa",
    }
)  # fmt: skip
_ENGLISH_MARKERS = frozenset(
    {
        "i", "you", "what", "how", "why", "which", "is", "are", "the", "a", "an", "and",
        "or", "not", "with", "for", "from", "have", "has", "do", "does", "my", "of",
        "symptoms", "disease", "fever", "cough", "pain", "treatment", "cause", "can",
        "should", "since", "days", "head", "stomach", "feel", "been", "who", "when",
    }
)  # fmt: skip

_WORD = re.compile(r"[^\W\d_]+", re.UNICODE)


def detect_language(text: str, default: Language = "id") -> Language:
    """Guess whether ``text`` is Indonesian or English from its function words.

    Ties (including text with no recognizable words) resolve to ``default``.
    """
    words = [w.lower() for w in _WORD.findall(text)]
    id_hits = sum(1 for w in words if w in _INDONESIAN_MARKERS)
    en_hits = sum(1 for w in words if w in _ENGLISH_MARKERS)
    if id_hits > en_hits:
        return "id"
    if en_hits > id_hits:
        return "en"
    return default


def format_context(results: Sequence[SimilarityResult]) -> str:
    """Render ranked results as Title / Content / Source blocks, in ranking order."""
    return CONTEXT_SEPARATOR.join(
        f"Title: {r.entry.title}\nContent: {r.entry.content}\nSource: {r.entry.source_url}"
        for r in results
    )


def build_grounded_prompt(question: str, results: Sequence[SimilarityResult]) -> str:
    """Build the instruction-constrained prompt for a question and its retrieved context."""
    return GROUNDED_PROMPT.format(
        context=format_context(results),
        question=question,
        disclaimer=DISCLAIMERS[detect_language(question)],
    )


def no_match_message(question: str) -> str:
    """Fixed reply used when retrieval finds nothing above the threshold."""
    return NO_MATCH_MESSAGES[detect_language(question)]


def build_title_prompt(question: str) -> str:
    return TITLE_PROMPT.format(question=question)
