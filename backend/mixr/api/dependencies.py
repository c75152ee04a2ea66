"""
Shared FastAPI dependencies: authenticated user and generation client.

Authentication itself happens upstream; the gateway forwards the verified
identity in the X-User-Id / X-User-Email headers.
"""
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from mixr.core.config import Settings, get_settings
from mixr.core.llm_client import LLMClient, get_llm_client
from mixr.db.crud_users import get_or_create_user
from mixr.db.models import UserModel
from mixr.db.schema import AuthUser
from mixr.db.session import get_db

DEV_USER = AuthUser(uid="dev-user-123", email="dev@mixr.local")


def get_auth_user(
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> AuthUser:
    """Resolve the caller's identity, or fail with 401."""
    if settings.auth_disabled:
        return DEV_USER

    if not x_user_id:
        raise HTTPException(status_code=401, detail="No token provided")

    return AuthUser(uid=x_user_id, email=x_user_email)


def get_current_user(
    auth_user: AuthUser = Depends(get_auth_user),
    db: Session = Depends(get_db)
) -> UserModel:
    """Get the database user for the caller, creating it on first use."""
    user = get_or_create_user(db, auth_user)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def get_generation_client() -> LLMClient:
    return get_llm_client()
