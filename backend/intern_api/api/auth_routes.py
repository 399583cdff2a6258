"""
Name: Auth Routes

Responsibilities:
  - Login (rate limited) and current identity (/me)
  - Email verification codes: issue and check
  - Registration with role-specific profile provisioning

Collaborators:
  - application.use_cases: LoginUseCase, RegisterUserUseCase
  - application.email_verification.EmailVerificationService
  - rate_limit.get_client_ip

Notes:
  - Everything under /api/auth is public except /me
  - Domain exceptions raised by the use cases are mapped in exception_handlers
"""

from fastapi import APIRouter, Depends, Request

from ..application.email_verification import EmailVerificationService
from ..application.profile_provisioning import ProfileDetails
from ..application.use_cases import (
    LoginInput,
    LoginUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from ..config import get_settings
from ..container import get_user_repository
from ..domain.repositories import UserRepository
from ..error_responses import bad_request, not_found
from ..rate_limit import get_client_ip
from ..users import User
from .dependencies import (
    current_user,
    get_login_use_case,
    get_register_use_case,
    get_verification_service,
)
from .schemas import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
    SendCodeRequest,
    SendCodeResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    request: Request,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(
        LoginInput(
            username=req.username,
            password=req.password,
            client_ip=get_client_ip(request),
        )
    )
    return LoginResponse(
        token=result.token,
        role=result.role,
        username=result.username,
        email=result.email,
    )


@router.get("/me", response_model=MeResponse)
def me(
    user: User = Depends(current_user),
    users: UserRepository = Depends(get_user_repository),
):
    # R: Re-read so a deleted account answers 404 rather than stale data
    stored = users.get_by_id(user.id)
    if stored is None:
        raise not_found("User not found")
    return MeResponse(
        id=stored.id,
        username=stored.username,
        email=stored.display_email,
        role=stored.role.value,
    )


@router.post(
    "/send-verification-code",
    response_model=SendCodeResponse,
    response_model_exclude_none=True,
)
def send_verification_code(
    req: SendCodeRequest,
    verification: EmailVerificationService = Depends(get_verification_service),
):
    email = (req.email or "").strip()
    if not email:
        raise bad_request("Email is required")

    code = verification.issue_code(email)
    return SendCodeResponse(
        message=f"Verification code sent to {email}",
        code=code if get_settings().expose_verification_code else None,
    )


@router.post("/verify-code", response_model=VerifyCodeResponse)
def verify_code(
    req: VerifyCodeRequest,
    verification: EmailVerificationService = Depends(get_verification_service),
):
    email = (req.email or "").strip()
    code = (req.code or "").strip()
    if not email or not code:
        raise bad_request("Email and code are required")

    if not verification.check_code(email, code):
        raise bad_request("Invalid verification code", extra={"valid": False})
    return VerifyCodeResponse(valid=True, message="Code verified successfully")


@router.post("/register", response_model=RegisterResponse)
def register(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_use_case),
):
    result = use_case.execute(
        RegisterUserInput(
            username=req.username,
            verification_code=req.verification_code,
            password=req.password,
            role=req.role,
            details=ProfileDetails(
                name=req.name, surname=req.surname, department=req.department
            ),
        )
    )
    return RegisterResponse(
        message="User registered successfully",
        user_id=str(result.user_id),
        role=result.role.value,
    )
