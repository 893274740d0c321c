import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.models.admin_user import AdminUser
from chocostore.schemas.user_schemas import AdminRegister, AdminLogin, AdminResponse, Token
from chocostore.utils.hash import hash_password, verify_password
from chocostore.utils.token import create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


# -------- AUTH ROUTES --------

@router.post("/register", response_model=AdminResponse)
def register_admin(payload: AdminRegister, session: Session = Depends(get_session)):
    # only the first back-office account can sign itself up
    if session.exec(select(AdminUser)).first():
        raise HTTPException(403, "Registration is closed")

    user = AdminUser(
        email=payload.email,
        password=hash_password(payload.password),
    )

    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Registered admin {user.id} ({user.email})")

    return AdminResponse(
        message="Registration successful.",
        user_id=user.id,
        email=user.email,
        role=user.role,
        can_login=user.can_login,
    )


@router.post("/login", response_model=Token)
def login(payload: AdminLogin, session: Session = Depends(get_session)):
    user = session.exec(select(AdminUser).where(AdminUser.email == payload.email)).first()

    if not user or not verify_password(payload.password, user.password):
        logger.warning(f"Failed login for {payload.email}")
        raise HTTPException(401, "Invalid email or password")

    if not user.can_login:
        raise HTTPException(403, "User account is disabled")

    token = create_access_token(user)
    return Token(access_token=token, token_type="bearer")


@router.get("/me")
def me(current_user: AdminUser = Depends(get_current_user)):
    return {
        "user_id": current_user.id,
        "email": current_user.email,
        "role": current_user.role,
        "can_login": current_user.can_login,
    }


@router.post("/logout")
def logout():
    # tokens are stateless; the client drops its copy
    return {"message": "Logout successful"}
