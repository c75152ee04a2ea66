"""
CRUD operations for users, saved preferences and favorites.
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from datetime import datetime

from mixr.db.models import UserModel, UserPreferenceModel, UserFavoriteModel
from mixr.db.schema import AuthUser


def get_user(db: Session, user_id: str) -> Optional[UserModel]:
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_or_create_user(db: Session, auth_user: AuthUser) -> Optional[UserModel]:
    """
    Get the user for an authenticated identity, creating it on first use.

    A user can only be created when the identity carries an email; the
    display name defaults to the email's local part.
    """
    user = get_user(db, auth_user.uid)

    if not user and auth_user.email:
        user = UserModel(
            id=auth_user.uid,
            email=auth_user.email,
            display_name=auth_user.email.split("@")[0],
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    return user


def update_display_name(db: Session, user: UserModel, display_name: str) -> UserModel:
    user.display_name = display_name
    user.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(user)
    return user


def get_preferences(db: Session, user_id: str) -> Optional[UserPreferenceModel]:
    return db.query(UserPreferenceModel).filter(UserPreferenceModel.user_id == user_id).first()


def upsert_preferences(
    db: Session,
    user_id: str,
    equipment_ids: Sequence[int],
    ingredient_ids: Sequence[int]
) -> UserPreferenceModel:
    """Replace a user's saved equipment and ingredient selections."""
    prefs = get_preferences(db, user_id)

    if not prefs:
        prefs = UserPreferenceModel(user_id=user_id)
        db.add(prefs)

    prefs.equipment_ids = list(equipment_ids)
    prefs.ingredient_ids = list(ingredient_ids)
    prefs.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(prefs)
    return prefs


def add_favorite(db: Session, user_id: str, recipe_id: int) -> bool:
    """Add a favorite; returns False when it already existed."""
    existing = (
        db.query(UserFavoriteModel)
        .filter(UserFavoriteModel.user_id == user_id, UserFavoriteModel.recipe_id == recipe_id)
        .first()
    )
    if existing:
        return False

    db.add(UserFavoriteModel(user_id=user_id, recipe_id=recipe_id))
    db.commit()
    return True


def remove_favorite(db: Session, user_id: str, recipe_id: int) -> None:
    (
        db.query(UserFavoriteModel)
        .filter(UserFavoriteModel.user_id == user_id, UserFavoriteModel.recipe_id == recipe_id)
        .delete(synchronize_session=False)
    )
    db.commit()


def get_favorite_recipe_ids(db: Session, user_id: str, skip: int = 0, limit: int = 20) -> List[int]:
    """Get a user's favorite recipe IDs, most recently added first."""
    rows = (
        db.query(UserFavoriteModel.recipe_id)
        .filter(UserFavoriteModel.user_id == user_id)
        .order_by(UserFavoriteModel.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return [row.recipe_id for row in rows]
