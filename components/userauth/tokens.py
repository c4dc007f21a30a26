from __future__ import annotations
import time
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from .contracts import ClockPort, TokenSignerPort
from .errors import InvalidTokenError

class SystemClock(ClockPort):
    def now_utc_ts(self) -> int:
        return int(time.time())

class JWTTokenSigner(TokenSignerPort):
    """
    HS256 JWT signer backed by python-jose.
    Expiry is checked against the injected clock rather than jose's wall clock,
    so tests can move time forward.
    """
    def __init__(self, secret: str, *, algorithm: str = "HS256", clock: Optional[ClockPort] = None):
        if not secret:
            raise ValueError("JWTTokenSigner requires non-empty secret")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock or SystemClock()

    def sign(self, claims: Dict[str, Any], *, expires_in: int) -> str:
        now = self._clock.now_utc_ts()
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + int(expires_in)
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as ex:
            raise InvalidTokenError(str(ex)) from ex
        if "exp" not in payload:
            raise InvalidTokenError("Token has no expiry")
        if self._clock.now_utc_ts() >= int(payload["exp"]):
            raise InvalidTokenError("Token expired")
        return payload
