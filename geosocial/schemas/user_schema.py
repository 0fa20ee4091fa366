from pydantic import BaseModel, ConfigDict, Field, AnyHttpUrl, StringConstraints, field_validator
from typing import Optional, Union, Literal, Annotated
from datetime import datetime

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

class CurrentUserResponse(UserResponse):
    is_admin: bool = False

class UserProfile(UserResponse):
    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0
    # Relationship status with current user
    is_following: bool = False

class ProfileUpdate(BaseModel):
    """Full profile edit; an empty bio or image URL clears the field"""
    first_name: Name = Field(..., description="First name")
    last_name: Name = Field(..., description="Last name")
    bio: Optional[str] = Field(None, max_length=500, description="Bio")
    profile_image_url: Optional[Union[Literal[""], AnyHttpUrl]] = Field(None, description="Profile image URL")

    @field_validator("bio", "profile_image_url", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

class ProfileResponse(BaseModel):
    """Safe subset of user fields returned after a profile edit"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None

class BioUpdate(BaseModel):
    bio: Optional[str] = Field(None, max_length=500)
