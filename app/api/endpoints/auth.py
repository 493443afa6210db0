from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.responses import success_response
from app.schemas.auth import UserRegister, UserLogin
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    user_data: Optional[UserRegister] = None,
    db: AsyncSession = Depends(get_db)
):
    """Register a new account"""
    account = await AuthService(db).register(user_data or UserRegister())
    return success_response(
        message="Your account has been created successfully.",
        status_code=status.HTTP_201_CREATED,
        user=account,
    )


@router.post("/login")
async def login(
    credentials: Optional[UserLogin] = None,
    db: AsyncSession = Depends(get_db)
):
    """Check email and password"""
    account = await AuthService(db).login(credentials or UserLogin())
    return success_response(message="You have logged in successfully.", user=account)
