# parking_api/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.schemas.user import UserUpdate, PasswordChange, UserOut
from parking_api.security import Principal, get_current_principal, require_admin
from parking_api.services import user_service
from parking_api.utils import response

router = APIRouter()


@router.get("/users", summary="List users (admin)")
def list_users(db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    users = user_service.list_users(db)
    return response.success([UserOut.model_validate(u) for u in users], "Users retrieved successfully")


@router.get("/users/{user_id}", summary="Get a user")
def get_user(user_id: str, db: Session = Depends(get_db),
             principal: Principal = Depends(get_current_principal)):
    user = user_service.get_user(db, user_id)
    return response.success(UserOut.model_validate(user), "User retrieved successfully")


@router.put("/users/{user_id}", summary="Update a user (admin)")
def update_user(user_id: str, body: UserUpdate, db: Session = Depends(get_db),
                principal: Principal = Depends(require_admin)):
    user = user_service.update_user(db, user_id, body, principal)
    return response.success(UserOut.model_validate(user), "User updated successfully")


@router.put("/users/{user_id}/change-password", summary="Change a password (self or admin)")
def change_password(user_id: str, body: PasswordChange, db: Session = Depends(get_db),
                    principal: Principal = Depends(get_current_principal)):
    user_service.change_password(db, user_id, body, principal)
    return response.success(None, "Password changed successfully")


@router.delete("/users/{user_id}", summary="Delete a user (admin)")
def delete_user(user_id: str, db: Session = Depends(get_db), principal: Principal = Depends(require_admin)):
    user_service.delete_user(db, user_id, principal)
    return response.success(None, "User deleted successfully")
