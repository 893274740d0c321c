from pydantic import BaseModel, EmailStr, model_validator


class AdminRegister(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str

    @model_validator(mode="after")
    def validate_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class AdminResponse(BaseModel):
    message: str
    user_id: int
    email: EmailStr
    role: str
    can_login: bool

class AdminLogin(BaseModel):
    email: EmailStr
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str
