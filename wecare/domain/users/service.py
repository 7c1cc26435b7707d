from typing import Optional, List
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.exceptions import ValidationError, handle_database_error
from wecare.domain.users.models import User
from wecare.domain.users.repository import UserRepository
from wecare.api.v1.users.schemas import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user profiles"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def create_user(self, user_data: UserCreate) -> User:
        """Create a new user profile"""
        if not user_data.name or not user_data.email:
            raise ValidationError("Name and email are required")

        try:
            user = await self.user_repo.create(user_data.model_dump())
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "Failed to create user", "create user") from e

        logger.info(f"Created user {user.id}")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            return await self.user_repo.get_by_email(email)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to fetch users", "get user by email") from e

    async def get_users(self) -> List[User]:
        """Get all users"""
        try:
            return await self.user_repo.get_all()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to fetch users", "list users") from e
