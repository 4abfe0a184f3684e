"""Account endpoints: registration, sign-in, own profile and access tokens."""

from fastapi import APIRouter, Depends, Response, status

from gatehouse.core.application import AppContext
from gatehouse.modules.auth.application.commands import (
    DeleteAccountCommand,
    RegisterCommand,
    RequestAccessTokenCommand,
    SignInCommand,
    UpdateProfileCommand,
)
from gatehouse.modules.auth.application.queries import GetProfileQuery
from gatehouse.presentation.http import get_app_context, get_auth_module, to_camel_dict

from .schemas import (
    AccessTokenRequest,
    RegisterRequest,
    SignInRequest,
    UpdateProfileRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, module=Depends(get_auth_module)):
    result = await module.register.execute(
        RegisterCommand(
            email=body.email,
            password=body.password,
            username=body.username,
            display_name=body.display_name,
        )
    )
    return to_camel_dict(result)


@router.post("/sign-in")
async def sign_in(body: SignInRequest, module=Depends(get_auth_module)):
    result = await module.sign_in.execute(
        SignInCommand(email_or_username=body.email_or_username, password=body.password)
    )
    return to_camel_dict(result)


@router.get("/me")
async def get_profile(
    context: AppContext = Depends(get_app_context), module=Depends(get_auth_module)
):
    result = await module.get_profile.execute(GetProfileQuery(), context)
    return to_camel_dict(result)


@router.put("/me", status_code=status.HTTP_204_NO_CONTENT)
async def update_profile(
    body: UpdateProfileRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.update_profile.execute(
        UpdateProfileCommand(display_name=body.display_name, username=body.username),
        context,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    context: AppContext = Depends(get_app_context), module=Depends(get_auth_module)
):
    await module.delete_account.execute(DeleteAccountCommand(), context)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/me/access-token")
async def request_access_token(body: AccessTokenRequest, module=Depends(get_auth_module)):
    result = await module.request_access_token.execute(
        RequestAccessTokenCommand(id_token=body.id_token)
    )
    return to_camel_dict(result)
