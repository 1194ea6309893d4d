# parking_api/routers/auth.py
"""Account registration, login (JWT) and the caller's own profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.schemas.user import UserRegister, UserLogin, UserOut, LoginOut
from parking_api.security import Principal, get_current_principal
from parking_api.services import user_service
from parking_api.utils import response

router = APIRouter()


@router.post("/auth/register", status_code=201, summary="Create an account")
def register(body: UserRegister, db: Session = Depends(get_db)):
    user = user_service.register_user(db, body)
    return response.created(UserOut.model_validate(user), "User registered successfully")


@router.post("/auth/login", summary="Exchange credentials for a bearer token")
def login(body: UserLogin, db: Session = Depends(get_db)):
    user, token = user_service.authenticate(db, body.email, body.password)
    return response.success(LoginOut(user=UserOut.model_validate(user), token=token), "Login successful")


@router.get("/auth/profile", summary="The authenticated user's profile")
def profile(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    user = user_service.get_user(db, principal.id)
    return response.success(UserOut.model_validate(user), "User profile retrieved successfully")
