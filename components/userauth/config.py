from __future__ import annotations
import os
from dataclasses import dataclass

@dataclass
class AuthConfig:
    json_token_key: str = os.getenv("JSON_TOKEN_KEY", "change-me-dev-secret")
    product_key_secret: str = os.getenv("PRODUCT_KEY_SECRET", "change-me-product-secret")
    token_ttl_seconds: int = int(os.getenv("TOKEN_TTL_SECONDS", "3600000"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    algorithm: str = os.getenv("AUTH_ALG", "HS256")
    # operator secret for issuing product keys over HTTP; empty disables the route
    admin_api_key: str = os.getenv("ADMIN_API_KEY", "")

    @classmethod
    def from_env(cls) -> "AuthConfig":
        # class-level defaults are bound at import time
        return cls(
            json_token_key=os.getenv("JSON_TOKEN_KEY", "change-me-dev-secret"),
            product_key_secret=os.getenv("PRODUCT_KEY_SECRET", "change-me-product-secret"),
            token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", "3600000")),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            algorithm=os.getenv("AUTH_ALG", "HS256"),
            admin_api_key=os.getenv("ADMIN_API_KEY", ""),
        )
