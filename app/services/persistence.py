"""
Commit helper shared by the services.

Unique-index violations become ConflictError so the database constraint and
the service pre-check report the same way; any other SQLAlchemy failure is
wrapped in StorageError with the driver message.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, StorageError
from app.core.logging_config import logger


async def commit_or_raise(
    db: AsyncSession,
    operation: str,
    conflict_message: Optional[str] = None,
    conflict_field: Optional[str] = None,
) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if conflict_message:
            logger.warning(f"[Storage] Unique constraint hit during {operation}: {e.orig}")
            raise ConflictError(conflict_message, field=conflict_field) from e
        raise StorageError(str(e.orig), operation=operation) from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise StorageError(str(e), operation=operation) from e
