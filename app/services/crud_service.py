"""Generic data-access helpers shared by the resource endpoints."""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError


async def get_or_404(db: AsyncSession, model: Type[Any], obj_id: int, label: str) -> Any:
    result = await db.execute(select(model).where(model.id == obj_id))
    obj = result.scalar_one_or_none()
    if not obj:
        raise NotFoundError(f"{label} not found")
    return obj


async def find_where(
    db: AsyncSession,
    model: Type[Any],
    *criteria,
    order_by=None,
    limit: Optional[int] = None,
) -> List[Any]:
    query = select(model).where(*criteria)
    query = query.order_by(order_by if order_by is not None else model.id.asc())
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def exists_where(db: AsyncSession, model: Type[Any], *criteria) -> bool:
    return bool(await db.scalar(select(exists().where(*criteria).select_from(model))))


async def ensure_unique(
    db: AsyncSession,
    model: Type[Any],
    column,
    value: Any,
    label: str,
    exclude_id: Optional[int] = None,
) -> None:
    if value is None:
        return
    criteria = [column == value]
    if exclude_id is not None:
        criteria.append(model.id != exclude_id)
    if await exists_where(db, model, *criteria):
        raise ConflictError(f"{label} already exists")


async def ensure_unreferenced(
    db: AsyncSession,
    checks: Iterable[Tuple[Type[Any], Any]],
    message: str,
) -> None:
    """Block a delete while any (model, criterion) pair still matches a row."""
    for model, criterion in checks:
        if await exists_where(db, model, criterion):
            raise InvalidInputError(message, error_code="InUse")


async def commit_or_not_found(db: AsyncSession, model: Type[Any], obj_id: int, label: str) -> None:
    """Flush pending changes; a row removed underneath us becomes NotFound."""
    try:
        await db.flush()
    except StaleDataError:
        await db.rollback()
        if not await exists_where(db, model, model.id == obj_id):
            raise NotFoundError(f"{label} not found")
        raise


def ensure_path_matches(path_id: int, body_id: Optional[int]) -> None:
    if body_id is not None and body_id != path_id:
        raise InvalidInputError("Identifier in path does not match identifier in body", error_code="IdMismatch")


def apply_updates(obj: Any, updates: Dict[str, Any]) -> Any:
    for field, value in updates.items():
        setattr(obj, field, value)
    return obj
