"""
Learning bounded context - Domain layer.

This context handles AI-assisted flashcard creation:
- Generation requests and their audit trail
- Flashcards accepted from generated suggestions, with provenance

Aggregates:
- Generation: immutable audit record of one successful generation
- Flashcard: the study card created on acceptance
"""
