"""
Authentication routes: client self-registration and password login.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.users import UserService
from ..domain.users.router import to_response
from ..domain.users.schemas import LoginRequest, LoginResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=201)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = UserService(db).register(data)
    return {"message": "User registered successfully", "user_id": user.id}


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    token, user = UserService(db).login(data.email, data.password)
    return LoginResponse(token=token, user=to_response(user))
