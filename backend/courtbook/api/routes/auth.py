"""
Identity endpoints: login by email lookup and signup.
"""

from fastapi import APIRouter, Depends, status

from courtbook.schemas.user import User, UserCreate, UserLogin
from courtbook.services.engine_factory import BookingEngine, get_engine

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, engine: BookingEngine = Depends(get_engine)):
    """Register a new member, coach or admin. Coaches join the coach catalog."""
    return engine.users.signup(user_data)


@router.post("/login", response_model=User)
async def login(login_data: UserLogin, engine: BookingEngine = Depends(get_engine)):
    """Look a user up by email. Send the returned id as X-User-Id afterwards."""
    return engine.users.login(login_data)
