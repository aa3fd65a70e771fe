# auth_schemas: 인증 관련 Pydantic 모델

from pydantic import BaseModel, EmailStr


# 로그인 요청
class LoginRequest(BaseModel):
    email: EmailStr
    password: str
