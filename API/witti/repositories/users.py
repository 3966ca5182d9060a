from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from witti.models.entities import User


class DuplicateEmailError(Exception):
    """Raised when the unique constraint on users.email rejects an insert."""

    def __init__(self, email: str):
        super().__init__(f"email already registered: {email}")
        self.email = email


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Exact match on the stored email; callers normalise before looking up."""
        stmt = select(User).where(User.email == email)
        return (await self.session.scalars(stmt)).one_or_none()

    async def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        return (await self.session.scalar(stmt)) is not None

    async def create(self, email: str, password_hash: str, name: str, phone: str | None = None) -> User:
        """Insert a new user and flush it; the caller commits.

        The unique constraint is the source of truth for duplicates: a concurrent
        signup that slipped past the existence check surfaces here as
        ``DuplicateEmailError``, after the session has been rolled back.
        """
        user = User(email=email, password_hash=password_hash, name=name, phone=phone)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(email) from exc
        return user
