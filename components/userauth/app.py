from __future__ import annotations
from typing import Optional
from fastapi import FastAPI
from .config import AuthConfig
from .deps import set_auth_service
from .hashing import BcryptPasswordHasher
from .observability import RequestContextMiddleware
from .routes import router
from .service import AuthService
from .store import InMemoryUserStore
from .tokens import JWTTokenSigner

APP_NAME = "userauth"
APP_VERSION = "0.1.0"

def build_auth_service(cfg: Optional[AuthConfig] = None) -> AuthService:
    cfg = cfg or AuthConfig.from_env()
    return AuthService(
        user_store=InMemoryUserStore(),
        hasher=BcryptPasswordHasher(),
        signer=JWTTokenSigner(cfg.json_token_key, algorithm=cfg.algorithm),
        cfg=cfg,
    )

def create_app(service: Optional[AuthService] = None) -> FastAPI:
    app = FastAPI(title=APP_NAME, version=APP_VERSION)
    app.add_middleware(RequestContextMiddleware)

    set_auth_service(service or build_auth_service())
    app.include_router(router)

    return app
