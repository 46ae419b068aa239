from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from taskboard.dependencies import get_db
from taskboard.schemas.user import Token, UserCreate, UserLogin
from taskboard.services import users as user_service
from taskboard.utils.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user) -> dict:
    access_token = create_access_token(data={"sub": user.id})
    return {"token": access_token, "user": user}


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_service.create_user(db, user_data)
    print(f"[AUTH] New user signed up: {user.id}")
    return _token_response(user)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate(db, credentials.email, credentials.password)
    return _token_response(user)
