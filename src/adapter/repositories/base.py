from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.errors import DuplicateRecordError

ModelType = TypeVar("ModelType", bound=SQLModel)


class SqlModelRepository(Generic[ModelType]):
    """
    Shared write path for the SQLModel repositories.

    Repositories flush but never commit; the unit of work owns the
    transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, entity: ModelType) -> ModelType:
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateRecordError(str(exc.orig)) from exc
        await self.session.refresh(entity)
        return entity
