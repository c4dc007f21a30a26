import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from .contracts import TokenClaims
from .errors import InvalidTokenError
from .service import AuthService

_auth_service: Optional[AuthService] = None


def set_auth_service(svc: AuthService) -> None:
    global _auth_service
    _auth_service = svc


def get_auth_service() -> AuthService:
    if _auth_service is None:
        raise RuntimeError("AuthService not configured; call set_auth_service() during app wiring")
    return _auth_service


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    return authorization


def current_user(
    auth: AuthService = Depends(get_auth_service),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> TokenClaims:
    """
    Resolve the bearer token on the request into its claims, or fail with 401.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
        )

    token = authorization.split(" ", 1)[1].strip()
    try:
        return auth.verify_token(token)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")


def require_operator_key(
    auth: AuthService = Depends(get_auth_service),
    admin_key: Optional[str] = Header(default=None, alias="x-admin-key"),
) -> None:
    """
    Gate for operator-only routes. Refuses everything when no ADMIN_API_KEY is configured.
    """
    expected = auth.cfg.admin_api_key
    if not expected or not admin_key or not hmac.compare_digest(admin_key.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Operator key required")
