"""tencards: AI flashcard generation service."""

__version__ = "0.1.0"
