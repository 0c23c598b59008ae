"""
API dependencies for dependency injection
"""

from dataclasses import dataclass
from typing import Callable, FrozenSet, Generator, Optional
from uuid import UUID
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.exceptions import ForbiddenError, UnauthorizedError
from app.security import TokenError, decode_access_token, normalize_role
from domain.models import get_db_session

logger = logging.getLogger("schoolmeal.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


@dataclass(frozen=True)
class CurrentIdentity:
    """Caller resolved from a verified bearer token"""

    identity_user_id: UUID
    email: str
    roles: FrozenSet[str]

    def has_any_role(self, *roles: str) -> bool:
        return any(normalize_role(r) in self.roles for r in roles)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentIdentity:
    """Verify the bearer token; any failure is a 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token.")
    try:
        claims = decode_access_token(
            credentials.credentials,
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            leeway=settings.jwt_leeway_seconds,
        )
        identity_user_id = UUID(claims["sub"])
    except (TokenError, ValueError) as e:
        logger.info(f"token_rejected reason={e}")
        raise UnauthorizedError("Invalid or expired token.") from e

    return CurrentIdentity(
        identity_user_id=identity_user_id,
        email=str(claims.get("email", "")),
        roles=frozenset(normalize_role(r) for r in claims["roles"] if isinstance(r, str)),
    )


def require_roles(*roles: str) -> Callable[..., CurrentIdentity]:
    """
    Dependency factory: the caller must hold at least one of the roles.

    Usage:
        @router.post("", dependencies=[Depends(require_roles(ROLE_ADMIN))])
    """
    wanted = tuple(normalize_role(r) for r in roles)

    def _check(identity: CurrentIdentity = Depends(get_current_identity)) -> CurrentIdentity:
        if not identity.has_any_role(*wanted):
            logger.info(
                f"access_denied identity_user_id={identity.identity_user_id} required={','.join(wanted)}"
            )
            raise ForbiddenError(f"Requires one of roles: {', '.join(wanted)}.")
        return identity

    return _check
