from fastapi import APIRouter, Depends, HTTPException, Request, status

from jobtracker.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
)
from jobtracker.services.auth_service import AuthService
from jobtracker.services.container import get_auth_service
from jobtracker.utils.exceptions import AgentError
from jobtracker.utils.limiter import limiter
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

# All authentication-related endpoints
router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def register(
    request: Request,
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        logger.info(f"[API] Register attempt: {body.email}")
        return auth_service.register(body.name, body.email, body.password)
    except AgentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        logger.error(f"[API] Register error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


@router.post("/login", response_model=LoginResponse)
@limiter.limit("15/minute")
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Rate limited to 15 requests per minute per IP."""
    try:
        logger.info(f"[API] Login attempt: {body.email}")
        return auth_service.login(body.email, body.password)
    except AgentError as e:
        logger.warning(f"[API] Login failed for {body.email}: {e.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        logger.error(f"[API] Login error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
@limiter.limit("5/minute")
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    # No mail delivery: the token goes back in the response
    try:
        reset_token = auth_service.forgot_password(body.email)
        return ForgotPasswordResponse(message="Password reset token generated", resetToken=reset_token)
    except AgentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        logger.error(f"[API] Forgot password error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        auth_service.reset_password(body.token, body.newPassword)
        return MessageResponse(message="Password has been reset successfully")
    except AgentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        logger.error(f"[API] Reset password error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")
