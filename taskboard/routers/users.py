from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from taskboard.dependencies import get_db, get_current_user
from taskboard.schemas.user import UserResponse
from taskboard.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(db)
