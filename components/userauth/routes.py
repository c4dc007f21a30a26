from __future__ import annotations
from fastapi import APIRouter, Depends, Request, Response, status
from .contracts import (
    AuthError, AuthErrorKind, AuthResult, MeResponse, MetaPayload, ProductKeyRequest,
    ProductKeyResponse, SigninRequest, SignupRequest, TokenClaims, TokenResponse, UserType, UWFResponse,
)
from .deps import current_user, get_auth_service, require_operator_key
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

PRODUCT_KEY_REQUIRED_MESSAGE = "A valid product key is required for this account type"


def _meta(request: Request) -> MetaPayload:
    return MetaPayload(request_id=getattr(request.state, "request_id", None))

def _error(request: Request, response: Response, err: AuthError) -> UWFResponse:
    response.status_code = err.status_code
    return UWFResponse(ok=False, error=err.to_payload(), meta=_meta(request))

def _token_response(request: Request, response: Response, res: AuthResult[str]) -> UWFResponse:
    if not res.ok:
        return _error(request, response, res.error)
    return UWFResponse(ok=True, result=TokenResponse(token=res.value), meta=_meta(request))


@router.post("/signup/{user_type}", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
def signup(user_type: UserType, req: SignupRequest, request: Request, response: Response,
           svc: AuthService = Depends(get_auth_service)):
    if user_type is not UserType.BUYER:
        if not req.product_key or not svc.verify_product_key(req.email, user_type, req.product_key):
            err = AuthError(kind=AuthErrorKind.UNAUTHORIZED, message=PRODUCT_KEY_REQUIRED_MESSAGE)
            return _error(request, response, err)
    res = svc.signup(req.email, req.password, req.name, req.phone, user_type)
    return _token_response(request, response, res)

@router.post("/signin", response_model=UWFResponse)
def signin(req: SigninRequest, request: Request, response: Response,
           svc: AuthService = Depends(get_auth_service)):
    res = svc.signin(req.email, req.password)
    return _token_response(request, response, res)

@router.post("/key", response_model=UWFResponse, dependencies=[Depends(require_operator_key)])
def generate_product_key(req: ProductKeyRequest, request: Request,
                         svc: AuthService = Depends(get_auth_service)):
    key = svc.generate_product_key(req.email, req.user_type)
    return UWFResponse(ok=True, result=ProductKeyResponse(product_key=key), meta=_meta(request))

@router.get("/me", response_model=UWFResponse)
def me(request: Request, claims: TokenClaims = Depends(current_user)):
    return UWFResponse(ok=True, result=MeResponse(user=claims), meta=_meta(request))
