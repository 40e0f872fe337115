# backend/app/api/routes/users.py
# Routes des profils utilisateur (identifiés par email).

from typing import Annotated

from fastapi import APIRouter, Body, Response, status

from app.api.dependencies import Users
from app.api.dto.response_format import SuccessResponse
from app.models.user import User, UserCreate, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=SuccessResponse[User],
    status_code=status.HTTP_201_CREATED,
    summary="Créer un utilisateur",
    description="Idempotent par email : 200 avec le profil existant s’il est déjà enregistré.",
)
async def create_user(payload: Annotated[UserCreate, Body(...)], service: Users, response: Response):
    doc, created = await service.create_user(payload)
    if not created:
        response.status_code = status.HTTP_200_OK
        return SuccessResponse[User](data=User.model_validate(doc), message="User already exists")
    return SuccessResponse[User](data=User.model_validate(doc), message="User created")


@router.get("", response_model=list[User], summary="Lister les utilisateurs")
async def list_users(service: Users):
    return await service.list_users()


@router.get("/{email}", response_model=User, summary="Profil par email")
async def get_user(email: str, service: Users):
    return await service.get_user(email)


@router.patch("/{email}", response_model=User, summary="Modifier un profil")
async def update_user(email: str, payload: Annotated[UserUpdate, Body(...)], service: Users):
    return await service.update_user(email, payload)
