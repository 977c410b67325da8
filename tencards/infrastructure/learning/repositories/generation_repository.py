"""Repositories for generation audit records and error logs."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tencards.domain.common.value_objects import GenerationId, UserId
from tencards.domain.learning.entities import Generation, GenerationErrorLog
from tencards.infrastructure.learning.mappers.generation_mapper import (
    GenerationErrorLogMapper,
    GenerationMapper,
)
from tencards.models import Generation as GenerationORM


class GenerationRepository:
    """Repository for Generation audit records."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationMapper()

    def find_by_id(self, generation_id: GenerationId) -> Generation | None:
        """
        Find a generation by ID without an ownership filter.

        Args:
            generation_id: The generation ID

        Returns:
            Generation entity if found, None otherwise
        """
        orm_model = self.db.get(GenerationORM, generation_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def count_created_since(self, user_id: UserId, since: datetime) -> int:
        """
        Count the user's generations in a time window.

        Args:
            user_id: The user ID
            since: Start of the window (inclusive)

        Returns:
            Count of generations
        """
        stmt = select(func.count(GenerationORM.id)).where(
            GenerationORM.user_id == user_id.value,
            GenerationORM.created_at >= since,
        )
        return self.db.execute(stmt).scalar() or 0

    def find_recent_by_user(self, user_id: UserId, limit: int) -> list[Generation]:
        """
        Get the user's latest generations.

        Args:
            user_id: The user ID
            limit: Maximum number of records

        Returns:
            List of generation entities ordered by created_at DESC
        """
        stmt = (
            select(GenerationORM)
            .where(GenerationORM.user_id == user_id.value)
            .order_by(GenerationORM.created_at.desc())
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, generation: Generation) -> Generation:
        """
        Insert a new audit record.

        Args:
            generation: The generation entity to save

        Returns:
            Saved generation entity
        """
        orm_model = self.mapper.to_orm(generation)
        self.db.add(orm_model)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)


class GenerationErrorLogRepository:
    """Repository for failed generation logs."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationErrorLogMapper()

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        orm_model = self.mapper.to_orm(error_log)
        self.db.add(orm_model)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
