"""
Learning bounded context - Application layer.

Contains the AI generation workflow:
- Generate flashcard suggestions (ephemeral)
- Accept reviewed suggestions as flashcards
- List generation history
"""
