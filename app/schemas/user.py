from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    usuario: str = Field(min_length=1)
    password: str = Field(min_length=1)


class PasswordUpdate(BaseModel):
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: str = Field(serialization_alias="_id")
    usuario: str
    password: str

    model_config = {"from_attributes": True}
