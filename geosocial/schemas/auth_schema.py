from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class TokenData(BaseModel):
    """Claims carried by an identity-provider session token"""
    sub: str = Field(..., description="User ID")
    email: EmailStr = Field(..., description="Email")
    username: Optional[str] = Field(None, description="Preferred username")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    profile_image_url: Optional[str] = Field(None, description="Avatar URL")
    exp: Optional[int] = Field(None, description="Expiration timestamp")

class LogoutResponse(BaseModel):
    success: bool = True
