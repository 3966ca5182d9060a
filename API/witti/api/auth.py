"""Auth API: email availability, signup, login and the current member."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from witti.core.auth import get_current_user
from witti.core.errors import GENERIC_SERVER_ERROR, get_request_id
from witti.core.jwt_auth import create_access_token
from witti.core.logging import DOMAIN_AUTH, get_domain_logger
from witti.core.password import dummy_verify, hash_password, verify_password
from witti.core.validators import validate_email, validate_name, validate_password, validate_phone
from witti.db.database import get_db
from witti.models.entities import User
from witti.repositories.users import DuplicateEmailError, UserRepository
from witti.schemas.auth import (
    CheckEmailRequest,
    CheckEmailResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
    SignupRequest,
    SignupResponse,
    UserDetailOut,
    UserOut,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_domain_logger(__name__, DOMAIN_AUTH)

DUPLICATE_EMAIL_MESSAGE = "This email is already registered."
BAD_CREDENTIALS_MESSAGE = "Invalid email or password."


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _user_detail(user: User) -> UserDetailOut:
    return UserDetailOut(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        created_at=user.created_at.isoformat() if user.created_at else None,
    )


@router.post("/check-email", response_model=CheckEmailResponse)
async def check_email(payload: CheckEmailRequest, db: AsyncSession = Depends(get_db)):
    email = normalize_email(payload.email)
    result = validate_email(email)
    if not result.valid:
        raise HTTPException(status_code=400, detail=result.reason)
    exists = await UserRepository(db).email_exists(email)
    return CheckEmailResponse(available=not exists)


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(payload: SignupRequest, request: Request, db: AsyncSession = Depends(get_db)):
    email = normalize_email(payload.email)
    phone = (payload.phone or "").strip() or None
    for result in (
        validate_email(email),
        validate_password(payload.password),
        validate_name(payload.name),
        validate_phone(phone),
    ):
        if not result.valid:
            raise HTTPException(status_code=400, detail=result.reason)

    repo = UserRepository(db)
    if await repo.email_exists(email):
        raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL_MESSAGE)

    password_hash = await run_in_threadpool(hash_password, payload.password)
    try:
        user = await repo.create(email, password_hash, payload.name.strip(), phone)
        await db.commit()
    except DuplicateEmailError:
        logger.info("Signup lost insert race on an existing email")
        raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL_MESSAGE) from None
    except SQLAlchemyError as exc:
        logger.exception("Signup insert failed | request_id=%s", get_request_id(request), exc_info=exc)
        raise HTTPException(status_code=500, detail=GENERIC_SERVER_ERROR) from exc

    logger.info("Member registered: user_id=%s", user.id)
    return SignupResponse(user=UserOut(id=user.id, email=user.email, name=user.name))


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    email = normalize_email(payload.email)
    if not email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required.")

    user = await UserRepository(db).get_by_email(email)
    if user is None:
        # Unknown email and wrong password must look the same from outside.
        await run_in_threadpool(dummy_verify)
        verified = False
    else:
        verified = await run_in_threadpool(verify_password, payload.password, user.password_hash)
    if not verified:
        logger.info("Login rejected")
        raise HTTPException(status_code=401, detail=BAD_CREDENTIALS_MESSAGE)

    token = create_access_token(user.id, user.email, user.name)
    logger.info("Login succeeded: user_id=%s", user.id)
    return LoginResponse(token=token, user=_user_detail(user))


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(get_current_user)):
    return MeResponse(user=_user_detail(user))
