from __future__ import annotations
import hashlib
import logging
from typing import Optional
from pydantic import ValidationError
from .contracts import (
    PasswordHasherPort, TokenSignerPort, UserStorePort,
    AuthErrorKind, AuthResult, NewUser, TokenClaims, UserType,
)
from .errors import EmailAlreadyExistsError, InvalidTokenError
from .config import AuthConfig

log = logging.getLogger("userauth.service")

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
CONFLICT_MESSAGE = "Email is already registered"


def normalize_email(email: str) -> str:
    return email.strip()


class AuthService:
    """
    Signup, signin and product-key issuance.

    Expected failures come back as AuthResult errors (CONFLICT, INVALID_CREDENTIALS).
    Store or hashing faults are not caught here.
    """

    def __init__(
        self,
        *,
        user_store: UserStorePort,
        hasher: PasswordHasherPort,
        signer: TokenSignerPort,
        cfg: Optional[AuthConfig] = None,
    ):
        self.user_store = user_store
        self.hasher = hasher
        self.signer = signer
        self.cfg = cfg or AuthConfig()
        self._decoy_hash: Optional[str] = None

    # --------- Core operations ----------
    def signup(self, email: str, password: str, name: str, phone: str, user_type: UserType) -> AuthResult[str]:
        email = normalize_email(email)
        if self.user_store.find_by_email(email) is not None:
            log.info("signup_conflict user_type=%s", user_type.value)
            return AuthResult[str].failure(AuthErrorKind.CONFLICT, CONFLICT_MESSAGE)

        password_hash = self.hasher.hash(password, self.cfg.bcrypt_rounds)
        try:
            user = self.user_store.create(
                NewUser(email=email, name=name, phone=phone, password_hash=password_hash, user_type=user_type)
            )
        except EmailAlreadyExistsError:
            # lost a race with a concurrent signup for the same email
            log.info("signup_conflict_on_create user_type=%s", user_type.value)
            return AuthResult[str].failure(AuthErrorKind.CONFLICT, CONFLICT_MESSAGE)

        log.info("signup_created user_id=%s user_type=%s", user.id, user.user_type.value)
        return AuthResult[str].success(self._issue_token(name, user.id))

    def signin(self, email: str, password: str) -> AuthResult[str]:
        user = self.user_store.find_by_email(normalize_email(email))
        if user is None:
            # unknown emails still pay one bcrypt compare
            self.hasher.verify(password, self._get_decoy_hash())
            log.info("signin_rejected")
            return AuthResult[str].failure(AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        if not self.hasher.verify(password, user.password_hash):
            log.info("signin_rejected")
            return AuthResult[str].failure(AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

        log.info("signin_ok user_id=%s", user.id)
        return AuthResult[str].success(self._issue_token(user.name, user.id))

    def generate_product_key(self, email: str, user_type: UserType) -> str:
        return self.hasher.hash(self._product_key_material(email, user_type), self.cfg.bcrypt_rounds)

    def verify_product_key(self, email: str, user_type: UserType, product_key: str) -> bool:
        # keys are salted hashes; only the hasher can compare them
        return self.hasher.verify(self._product_key_material(email, user_type), product_key)

    def verify_token(self, token: str) -> TokenClaims:
        payload = self.signer.verify(token)
        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as ex:
            raise InvalidTokenError("Token claims are incomplete") from ex

    # --------- Helpers ----------
    def _issue_token(self, name: str, id: int) -> str:
        return self.signer.sign({"name": name, "id": id}, expires_in=self.cfg.token_ttl_seconds)

    def _get_decoy_hash(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self.hasher.hash("decoy-password", self.cfg.bcrypt_rounds)
        return self._decoy_hash

    def _product_key_material(self, email: str, user_type: UserType) -> str:
        raw = f"{normalize_email(email)}-{UserType(user_type).value}-{self.cfg.product_key_secret}"
        # digest keeps long emails from pushing the secret past bcrypt's input limit
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()
