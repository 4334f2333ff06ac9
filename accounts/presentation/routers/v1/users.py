from typing import Annotated

from fastapi import (
    APIRouter,
    Body,
    Cookie,
    Depends,
    HTTPException,
    Query,
    Response,
    Security,
    status,
)
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from accounts.application.activate_user import activate_user
from accounts.application.current_user import CurrentUser, resolve_current_user
from accounts.application.login_user import login_user, logout_user
from accounts.application.register_user import register_user
from accounts.application.update_user import update_user
from accounts.domain.entities import User
from accounts.domain.errors import (
    AccountNotActivated,
    InvalidActivationToken,
    InvalidCredentials,
    InvalidInput,
    InvalidUserData,
    NotAllowed,
    UserAlreadyExists,
    UserNotFound,
)
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.email_port import EmailPort
from accounts.domain.ports.session_store import SessionStorePort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.domain.services import ProfileRules
from accounts.presentation.dependencies import (
    get_app_settings,
    get_credentials,
    get_email_port,
    get_profile_rules,
    get_sessions,
    get_uow,
)
from accounts.schemas.requests import LoginIn, UserCreateIn, UserUpdateIn
from accounts.schemas.responses import AcceptedOut, OkOut, TokenOut, UserOut
from accounts.settings import Settings

router = APIRouter(prefix="/users", tags=["Users"])
security = HTTPBasic()
bearer_scheme = HTTPBearer(auto_error=False)

USER_ID_COOKIE = "user_id"
REMEMBER_COOKIE = "remember_token"
SESSION_HEADER = "X-Session-Token"
UNHASHABLE_PASSWORD = "is too long or contains unsupported characters"


def _invalid_data(e: InvalidUserData) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail={"errors": e.errors}
    )


def _user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        activated=user.activated,
        activated_at=user.activated_at,
    )


async def get_current_user(
    response: Response,
    auth: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    remember_user_id: Annotated[str | None, Cookie(alias=USER_ID_COOKIE)] = None,
    remember_cookie: Annotated[str | None, Cookie(alias=REMEMBER_COOKIE)] = None,
    uow: UnitOfWorkPort = Depends(get_uow),
    credentials: CredentialsPort = Depends(get_credentials),
    sessions: SessionStorePort = Depends(get_sessions),
) -> CurrentUser:
    current = await resolve_current_user(
        uow=uow,
        credentials=credentials,
        sessions=sessions,
        session_token=auth.credentials if auth else None,
        user_id=remember_user_id,
        remember_token=remember_cookie,
    )
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )
    if current.new_session_token:
        response.headers[SESSION_HEADER] = current.new_session_token
    return current


@router.post(
    "/",
    status_code=202,
    response_model=AcceptedOut,
)
async def post_create_user(
    body: UserCreateIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    credentials: Annotated[CredentialsPort, Depends(get_credentials)],
    email_port: Annotated[EmailPort, Depends(get_email_port)],
    rules: Annotated[ProfileRules, Depends(get_profile_rules)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    try:
        result = await register_user(
            uow=uow,
            credentials=credentials,
            email_port=email_port,
            name=body.name,
            email=body.email,
            password=body.password,
            rules=rules,
            base_url=settings.public_base_url,
        )
    except InvalidUserData as e:
        raise _invalid_data(e)
    except InvalidInput:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": {"password": [UNHASHABLE_PASSWORD]}},
        )
    except UserAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="email already taken"
        )
    return AcceptedOut(email_sent=result.email_sent)


@router.get("/activate/{token}", response_model=OkOut)
async def get_activate_user(
    token: str,
    email: str = Query(...),
    uow: UnitOfWorkPort = Depends(get_uow),
    credentials: CredentialsPort = Depends(get_credentials),
):
    try:
        await activate_user(uow=uow, credentials=credentials, email=email, token=token)
    except InvalidActivationToken:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="invalid activation link"
        )
    return OkOut()


@router.post("/login", response_model=TokenOut)
async def post_login(
    response: Response,
    creds: HTTPBasicCredentials = Depends(security),
    payload: LoginIn | None = Body(default=None),
    uow: UnitOfWorkPort = Depends(get_uow),
    credentials: CredentialsPort = Depends(get_credentials),
    sessions: SessionStorePort = Depends(get_sessions),
    settings: Settings = Depends(get_app_settings),
):
    remember_me = payload.remember_me if payload else False
    try:
        result = await login_user(
            uow=uow,
            credentials=credentials,
            sessions=sessions,
            email=creds.username,
            password=creds.password,
            remember_me=remember_me,
        )
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials"
        )
    except AccountNotActivated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="account not activated"
        )

    if result.remember_token:
        max_age = settings.remember_cookie_max_age_seconds
        response.set_cookie(
            USER_ID_COOKIE, result.user.id, max_age=max_age, httponly=True
        )
        response.set_cookie(
            REMEMBER_COOKIE, result.remember_token, max_age=max_age, httponly=True
        )
    else:
        response.delete_cookie(USER_ID_COOKIE)
        response.delete_cookie(REMEMBER_COOKIE)
    return TokenOut(token=result.session_token)


@router.post("/logout", response_model=OkOut)
async def post_logout(
    response: Response,
    current: CurrentUser = Depends(get_current_user),
    auth: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    uow: UnitOfWorkPort = Depends(get_uow),
    sessions: SessionStorePort = Depends(get_sessions),
):
    await logout_user(
        uow=uow,
        sessions=sessions,
        user=current.user,
        session_token=current.new_session_token or (auth.credentials if auth else None),
    )
    response.delete_cookie(USER_ID_COOKIE)
    response.delete_cookie(REMEMBER_COOKIE)
    return OkOut()


@router.get("/me", response_model=UserOut)
async def get_me(current: CurrentUser = Depends(get_current_user)):
    return _user_out(current.user)


@router.patch("/{user_id}", response_model=UserOut)
async def patch_user(
    user_id: str,
    body: UserUpdateIn,
    current: CurrentUser = Depends(get_current_user),
    uow: UnitOfWorkPort = Depends(get_uow),
    credentials: CredentialsPort = Depends(get_credentials),
    rules: ProfileRules = Depends(get_profile_rules),
):
    try:
        user = await update_user(
            uow=uow,
            credentials=credentials,
            current=current.user,
            user_id=user_id,
            rules=rules,
            name=body.name,
            email=body.email,
            password=body.password,
        )
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    except NotAllowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="not allowed")
    except InvalidUserData as e:
        raise _invalid_data(e)
    except InvalidInput:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": {"password": [UNHASHABLE_PASSWORD]}},
        )
    except UserAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="email already taken"
        )
    return _user_out(user)
