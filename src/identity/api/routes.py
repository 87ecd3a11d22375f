"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError

from identity.accounts import public_view
from identity.api.schemas import LoginRequest, RegisterUserRequest, UpdateProfileRequest, UserResponse
from storefront import Storefront, get_storefront

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", status_code=201, response_model=UserResponse)
def register_user(body: RegisterUserRequest, storefront: Storefront = Depends(get_storefront)) -> UserResponse:
    user = storefront.accounts.register(**body.model_dump(exclude_none=True))
    return UserResponse(**public_view(user))


@router.post("/login", response_model=UserResponse)
def login(body: LoginRequest, storefront: Storefront = Depends(get_storefront)):
    user = storefront.accounts.authenticate(body.username, body.password)
    if user is None:
        return JSONResponse(status_code=401, content={"message": "Invalid username or password"})
    return UserResponse(**public_view(user))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, storefront: Storefront = Depends(get_storefront)) -> UserResponse:
    user = storefront.accounts.get_profile(user_id)
    if user is None:
        raise ObjectNotFoundError("User not found")
    return UserResponse(**public_view(user))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int, body: UpdateProfileRequest, storefront: Storefront = Depends(get_storefront)
) -> UserResponse:
    user = storefront.accounts.update_profile(user_id, **body.model_dump(exclude_unset=True))
    if user is None:
        raise ObjectNotFoundError("User not found")
    return UserResponse(**public_view(user))
