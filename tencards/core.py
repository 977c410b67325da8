from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from tencards.application.learning.services.generation_rate_limiter import (
    GenerationRateLimiter,
)
from tencards.application.learning.use_cases.accept_flashcards_use_case import (
    AcceptFlashcardsUseCase,
)
from tencards.application.learning.use_cases.generate_flashcards_use_case import (
    GenerateFlashcardsUseCase,
)
from tencards.application.learning.use_cases.list_generations_use_case import (
    ListGenerationsUseCase,
)
from tencards.config import get_settings
from tencards.infrastructure.ai.ai_service import AIGenerationService
from tencards.infrastructure.ai.model_client import ResilientModelClient
from tencards.infrastructure.ai.retry_policy import RetryConfig
from tencards.infrastructure.learning.repositories.deck_repository import DeckRepository
from tencards.infrastructure.learning.repositories.flashcard_repository import (
    FlashcardRepository,
)
from tencards.infrastructure.learning.repositories.generation_repository import (
    GenerationErrorLogRepository,
    GenerationRepository,
)


def openrouter_api_key() -> str | None:
    """Read the provider key at call time so rotated keys are picked up after the cache TTL."""
    return get_settings().OPENROUTER_API_KEY


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Model provider (one client per process; it owns the credential cache and usage counters)
    retry_config = providers.Factory(
        RetryConfig,
        attempts=settings.provided.AI_RETRY_ATTEMPTS,
        factor=settings.provided.AI_RETRY_FACTOR,
        min_timeout_ms=settings.provided.AI_RETRY_MIN_TIMEOUT_MS,
    )
    model_client = providers.Singleton(
        ResilientModelClient,
        api_key_provider=providers.Object(openrouter_api_key),
        base_url=settings.provided.OPENROUTER_BASE_URL,
        default_model=settings.provided.AI_DEFAULT_MODEL,
        timeout_s=settings.provided.AI_REQUEST_TIMEOUT_SECONDS,
        retry=retry_config,
        app_url=settings.provided.AI_APP_URL,
        app_title=settings.provided.AI_APP_TITLE,
    )
    ai_flashcard_service = providers.Singleton(
        AIGenerationService,
        model_client=model_client,
        use_mock=settings.provided.USE_MOCK_AI,
        mock_min_latency_ms=settings.provided.MOCK_AI_MIN_LATENCY_MS,
        mock_max_latency_ms=settings.provided.MOCK_AI_MAX_LATENCY_MS,
    )

    # Repositories
    deck_repository = providers.Factory(DeckRepository, db=db)
    generation_repository = providers.Factory(GenerationRepository, db=db)
    generation_error_log_repository = providers.Factory(GenerationErrorLogRepository, db=db)
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)

    # Application services
    generation_rate_limiter = providers.Factory(
        GenerationRateLimiter,
        generation_repository=generation_repository,
        limit_per_hour=settings.provided.GENERATION_RATE_LIMIT_PER_HOUR,
    )

    # Learning module use cases
    generate_flashcards_use_case = providers.Factory(
        GenerateFlashcardsUseCase,
        deck_repository=deck_repository,
        generation_repository=generation_repository,
        error_log_repository=generation_error_log_repository,
        rate_limiter=generation_rate_limiter,
        ai_flashcard_service=ai_flashcard_service,
        default_model=settings.provided.AI_DEFAULT_MODEL,
    )

    accept_flashcards_use_case = providers.Factory(
        AcceptFlashcardsUseCase,
        generation_repository=generation_repository,
        deck_repository=deck_repository,
        flashcard_repository=flashcard_repository,
    )

    list_generations_use_case = providers.Factory(
        ListGenerationsUseCase,
        generation_repository=generation_repository,
    )


# Initialize container
container = Container()
