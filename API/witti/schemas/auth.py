from pydantic import BaseModel, Field


class CheckEmailRequest(BaseModel):
    email: str = ""


class SignupRequest(BaseModel):
    # Field rules live in witti.core.validators so every failure gets the same message shape.
    email: str = ""
    password: str = ""
    name: str = ""
    phone: str | None = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = Field(default="", max_length=1024)


class UserOut(BaseModel):
    id: int
    email: str
    name: str


class UserDetailOut(UserOut):
    phone: str | None = None
    created_at: str | None = None


class SignupResponse(BaseModel):
    success: bool = True
    user: UserOut


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserDetailOut


class MeResponse(BaseModel):
    success: bool = True
    user: UserDetailOut


class CheckEmailResponse(BaseModel):
    success: bool = True
    available: bool
