from .service import AuthService
from .contracts import AuthError, AuthErrorKind, AuthResult, TokenClaims, User, UserType
from .config import AuthConfig
from .errors import UserAuthError, EmailAlreadyExistsError, InvalidTokenError
from .hashing import BcryptPasswordHasher
from .store import InMemoryUserStore
from .tokens import JWTTokenSigner, SystemClock
from .deps import set_auth_service, get_auth_service, current_user, require_operator_key
from .routes import router as auth_router
from .app import build_auth_service, create_app

__all__ = [
    "AuthService",
    "AuthError",
    "AuthErrorKind",
    "AuthResult",
    "TokenClaims",
    "User",
    "UserType",
    "AuthConfig",
    "UserAuthError",
    "EmailAlreadyExistsError",
    "InvalidTokenError",
    "BcryptPasswordHasher",
    "InMemoryUserStore",
    "JWTTokenSigner",
    "SystemClock",
    "set_auth_service",
    "get_auth_service",
    "current_user",
    "require_operator_key",
    "auth_router",
    "build_auth_service",
    "create_app",
]
