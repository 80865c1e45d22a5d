import logging

from fastapi import APIRouter, Depends, Request, Response, HTTPException

from ..config import settings
from ..limiter import limiter
from ..models import User
from ..schemas import RegisterIn, LoginIn, UserOut
from ..security import hash_password, verify_password, set_session, clear_session, require_user
from ..storage import EntityStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201)
@limiter.limit(settings.RATE_LIMIT_AUTH)
def api_register(request: Request, payload: RegisterIn, response: Response, store: EntityStore = Depends(get_store)):
    if store.get_user_by_username(payload.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    user = store.create(
        User,
        username=payload.username,
        hashed_password=hash_password(payload.password),
        name=payload.name,
        email=payload.email,
        avatar=payload.avatar,
    )
    set_session(response, user.id)
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=UserOut)
@limiter.limit(settings.RATE_LIMIT_AUTH)
def api_login(request: Request, payload: LoginIn, response: Response, store: EntityStore = Depends(get_store)):
    user = store.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid username or password")
    set_session(response, user.id)
    return user


@router.post("/logout")
def api_logout(response: Response):
    clear_session(response)
    return {"ok": True}


@router.get("/user", response_model=UserOut)
def api_me(user: User = Depends(require_user)):
    return user
