from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.core.db import get_db
from borne_api.repositories.user_repository import UserRepository
from borne_api.schemas.users import UserIn, UserListResponse, UserOut

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    limit: int = Query(default=200, ge=1, le=5000),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> UserListResponse:
    repo = UserRepository(db)

    items = await repo.list_users(limit=limit, offset=offset)
    total = await repo.count_users()

    return UserListResponse(
        items=[UserOut.model_validate(x) for x in items],
        total=total,
    )


@router.get("/{user_id}", response_model=UserOut, summary="Get a user")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)) -> UserOut:
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Fails with 409 when the username or e-mail is already taken.",
)
async def create_user(payload: UserIn, db: AsyncSession = Depends(get_db)) -> UserOut:
    repo = UserRepository(db)
    if await repo.find_conflict(payload.username, payload.email):
        raise HTTPException(status_code=409, detail="Username or e-mail already in use")

    user = await repo.create(**payload.model_dump())
    return UserOut.model_validate(user)


@router.put("/{user_id}", response_model=UserOut, summary="Replace a user")
async def update_user(user_id: int, payload: UserIn, db: AsyncSession = Depends(get_db)) -> UserOut:
    repo = UserRepository(db)
    user = await repo.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if await repo.find_conflict(payload.username, payload.email, exclude_id=user_id):
        raise HTTPException(status_code=409, detail="Username or e-mail already in use")

    user = await repo.update(user, **payload.model_dump())
    return UserOut.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="Places and reservations of the user are kept, without a user.",
)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    repo = UserRepository(db)
    user = await repo.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    await repo.delete(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
