from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from parishdesk.core.config import settings
from parishdesk.services.session import SessionUser

bearer_scheme = HTTPBearer(auto_error=False)


class InvalidTokenError(ValueError):
    pass


def user_from_token(token: str) -> SessionUser:
    """Read the staff identity from a token issued by the identity provider."""

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Invalid token payload")

    return SessionUser(
        id=str(subject),
        name=str(payload.get("name") or ""),
        is_super_admin=bool(payload.get("is_super_admin") or payload.get("isSuperAdmin")),
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionUser:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return user_from_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc


def require_super_admin(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not user.is_super_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Super Admin privileges required")
    return user
