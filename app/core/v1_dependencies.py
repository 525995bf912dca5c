"""Dependencies for v1 API routes."""

from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import ADMIN_ROLE, decode_backend_access_token
from app.services import notification_service
from app.workers.tasks_settlement import enqueue_settlement

security = HTTPBearer()

SettlementScheduler = Callable[[str, int], None]
PushSink = Callable[[int, str], Awaitable[bool]]


@dataclass(frozen=True)
class Principal:
    subject: str
    role: str


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Principal:
    payload = decode_backend_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    sub = payload.get("sub")
    if sub is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

    return Principal(subject=str(sub), role=str(payload.get("role") or ""))


async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    if principal.role != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return principal


def get_settlement_scheduler() -> SettlementScheduler:
    """Scheduler used by order creation; overridden in tests."""
    return enqueue_settlement


def get_push_sink() -> PushSink:
    return notification_service.send
