"""Request bodies of the auth REST API.

Bodies use camelCase keys on the wire; the models accept snake_case as well.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Account


class RegisterRequest(CamelModel):
    email: str
    password: str
    username: str | None = None
    display_name: str | None = None


class SignInRequest(CamelModel):
    email_or_username: str
    password: str


class AccessTokenRequest(CamelModel):
    id_token: str


class UpdateProfileRequest(CamelModel):
    display_name: str | None = None
    username: str | None = None


# Administration


class UpdateUserRequest(CamelModel):
    display_name: str | None = None
    username: str | None = None


class ToggleUserStatusRequest(CamelModel):
    enabled: bool


class CreateUserGroupRequest(CamelModel):
    name: str
    description: str | None = None


class UpdateUserGroupRequest(CamelModel):
    name: str | None = None
    description: str | None = None


class AddRoleRequest(CamelModel):
    role_id: str = Field(min_length=1)
