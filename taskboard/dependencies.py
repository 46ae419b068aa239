from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from taskboard.database import get_db as db_session
from taskboard.config import settings
from taskboard.errors import UnauthorizedError
from taskboard.models.user import User as UserModel
from taskboard.utils.security import decode_access_token

# auto_error is off so every failure shape is reported as UnauthorizedError
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

def get_db(db: AsyncSession = Depends(db_session)):
    return db

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme)
):
    if not token:
        raise UnauthorizedError("Not authorized, no token")

    user_id = decode_access_token(token)
    if user_id is None:
        raise UnauthorizedError("Not authorized, token failed")

    result = await db.execute(select(UserModel).filter(UserModel.id == user_id))
    user = result.scalars().first()
    if user is None:
        raise UnauthorizedError("Not authorized, token failed")
    return user
