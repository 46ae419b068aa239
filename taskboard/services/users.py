from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError

from taskboard.errors import ValidationError
from taskboard.models.user import User
from taskboard.schemas.user import UserCreate
from taskboard.utils.security import get_password_hash, verify_password


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == email.lower()))
    return result.scalars().first()


async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
    email = user_data.email.lower()
    if await get_user_by_email(db, email):
        raise ValidationError("User already exists")

    new_user = User(
        name=user_data.name,
        email=email,
        password_hash=get_password_hash(user_data.password),
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup with the same email
        await db.rollback()
        raise ValidationError("User already exists")
    return new_user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise ValidationError("Invalid credentials")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.name))
    return list(result.scalars().all())
