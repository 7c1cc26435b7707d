"""
User API Routes
"""

from typing import Any, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.infrastructure.database import get_db
from wecare.domain.users.service import UserService
from wecare.api.v1.users.schemas import UserCreate, UserResponse

router = APIRouter()


@router.get("")
async def read_users(
    email: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Look up one user by email, or list all users"""
    service = UserService(db)
    if email:
        user = await service.get_user_by_email(email)
        return UserResponse.model_validate(user) if user else None

    users = await service.get_users()
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse)
async def create_user(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    service = UserService(db)
    return await service.create_user(user_in)
