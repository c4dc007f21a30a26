from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Generic, Literal, Optional, Protocol, TypeVar
from pydantic import BaseModel, Field, constr

T = TypeVar("T")

# ---------- Unified Wire Format (UWF) ----------
class ErrorPayload(BaseModel):
    type: Literal["AUTH_ERROR","VALIDATION","CONFLICT","INTERNAL"]
    code: constr(strip_whitespace=True, min_length=1)
    message: constr(strip_whitespace=True, min_length=1)
    details: Optional[Dict[str, Any]] = None

class MetaPayload(BaseModel):
    request_id: Optional[str] = None
    duration_ms: Optional[int] = None

class UWFResponse(BaseModel):
    ok: bool
    result: Optional[Any] = None
    error: Optional[ErrorPayload] = None
    meta: MetaPayload = Field(default_factory=MetaPayload)

# ---------- Domain Models ----------
class UserType(str, Enum):
    BUYER = "BUYER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"

class NewUser(BaseModel):
    email: str
    name: str
    phone: str
    password_hash: str
    user_type: UserType

class User(NewUser):
    id: int

class TokenClaims(BaseModel):
    name: str
    id: int
    iat: int
    exp: int

# ---------- Results ----------
class AuthErrorKind(str, Enum):
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"

_STATUS_BY_KIND = {
    AuthErrorKind.CONFLICT: 409,
    AuthErrorKind.INVALID_CREDENTIALS: 400,
    AuthErrorKind.UNAUTHORIZED: 401,
}

class AuthError(BaseModel):
    kind: AuthErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def to_payload(self) -> ErrorPayload:
        err_type = "CONFLICT" if self.kind is AuthErrorKind.CONFLICT else "AUTH_ERROR"
        return ErrorPayload(type=err_type, code=self.kind.value, message=self.message)

class AuthResult(BaseModel, Generic[T]):
    """
    Outcome of a service operation: either `value` (ok=True) or `error`.
    Expected failures (duplicate email, bad credentials) travel here instead of
    being raised; unexpected ones still propagate as exceptions.
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[AuthError] = None

    @classmethod
    def success(cls, value: T) -> "AuthResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: AuthErrorKind, message: str) -> "AuthResult[T]":
        return cls(ok=False, error=AuthError(kind=kind, message=message))

# ---------- Ports (Contracts) ----------
class UserStorePort(Protocol):
    """
    Contract for user persistence. `create` must raise EmailAlreadyExistsError
    when the email is taken, so racing signups cannot both succeed.
    """
    def find_by_email(self, email: str) -> Optional[User]: ...
    def create(self, fields: NewUser) -> User: ...

class PasswordHasherPort(Protocol):
    def hash(self, plaintext: str, rounds: int) -> str: ...
    def verify(self, plaintext: str, hashed: str) -> bool: ...

class TokenSignerPort(Protocol):
    """
    Contract for signing/verifying compact tokens with a shared secret.
    `sign` adds iat/exp; `verify` raises InvalidTokenError on bad signature or expiry.
    """
    def sign(self, claims: Dict[str, Any], *, expires_in: int) -> str: ...
    def verify(self, token: str) -> Dict[str, Any]: ...

class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

# ---------- Service I/O ----------
class SignupRequest(BaseModel):
    email: constr(strip_whitespace=True, min_length=3)
    password: constr(min_length=1)
    name: constr(strip_whitespace=True, min_length=1)
    phone: str
    product_key: Optional[str] = None

class SigninRequest(BaseModel):
    email: constr(strip_whitespace=True)
    password: str

class ProductKeyRequest(BaseModel):
    email: constr(strip_whitespace=True, min_length=3)
    user_type: UserType

class TokenResponse(BaseModel):
    token: str

class ProductKeyResponse(BaseModel):
    product_key: str

class MeResponse(BaseModel):
    user: TokenClaims
