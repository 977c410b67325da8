"""Prompt text and output schema for flashcard generation."""

from typing import Any

FLASHCARDS_SCHEMA_NAME = "flashcards"

# Strict structured output needs additionalProperties: false on every object
FLASHCARDS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "flashcards": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "front": {"type": "string"},
                    "back": {"type": "string"},
                },
                "required": ["front", "back"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["flashcards"],
    "additionalProperties": False,
}


def flashcards_instructions(count: int) -> str:
    return f"""You are an expert at creating high-quality flashcards for effective learning.
Generate exactly {count} flashcards from the provided text.
Each flashcard should have a clear question (front) and answer (back).
Focus on key concepts and facts suitable for spaced repetition.

IMPORTANT: Detect the language of the source text and create ALL flashcards in that SAME language.
For example:
- If the source text is in Polish, write questions and answers in Polish.
- If the source text is in English, write questions and answers in English.
Do NOT translate or mix languages. Keep everything in the original language of the source text."""


def source_text_message(source_text: str) -> str:
    return f"Source text:\n{source_text}"
