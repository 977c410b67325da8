"""Mappers for Generation and GenerationErrorLog ORM ↔ Domain conversion."""

from tencards.domain.common.value_objects import (
    ContentHash,
    GenerationErrorLogId,
    GenerationId,
    UserId,
)
from tencards.domain.learning.entities import Generation, GenerationErrorLog
from tencards.models import Generation as GenerationORM
from tencards.models import GenerationErrorLog as GenerationErrorLogORM


class GenerationMapper:
    """Mapper for Generation ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationORM) -> Generation:
        """Convert ORM model to domain entity."""
        return Generation(
            id=GenerationId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model=orm_model.model,
            source_text_hash=ContentHash(orm_model.source_text_hash),
            source_text_length=orm_model.source_text_length,
            generated_count=orm_model.generated_count,
            generation_duration_ms=orm_model.generation_duration,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Generation) -> GenerationORM:
        """Convert domain entity to a new ORM model. Audit rows are never updated."""
        return GenerationORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            model=domain_entity.model,
            source_text_hash=domain_entity.source_text_hash.value,
            source_text_length=domain_entity.source_text_length,
            generated_count=domain_entity.generated_count,
            generation_duration=domain_entity.generation_duration_ms,
            created_at=domain_entity.created_at,
        )


class GenerationErrorLogMapper:
    """Mapper for GenerationErrorLog ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationErrorLogORM) -> GenerationErrorLog:
        return GenerationErrorLog(
            id=GenerationErrorLogId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model=orm_model.model,
            error_code=orm_model.error_code,
            error_message=orm_model.error_message,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: GenerationErrorLog) -> GenerationErrorLogORM:
        return GenerationErrorLogORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            model=domain_entity.model,
            error_code=domain_entity.error_code,
            error_message=domain_entity.error_message,
            created_at=domain_entity.created_at,
        )
