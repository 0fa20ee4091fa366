from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError
import logging

from geosocial.config import settings
from geosocial.schemas.auth_schema import TokenData
from geosocial.models.user import User
from geosocial.db.session import get_db
from geosocial.services.redis_service import get_session_store
from geosocial.services.user_service import UserService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

class AuthService:
    def __init__(self, db: Optional[AsyncSession] = None, session_store=None):
        self.db = db
        self.session_store = session_store or get_session_store()

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Issue a signed session token (identity provider side, dev tooling and tests)"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.ALGORITHM)

    async def verify_token(self, token: str) -> Optional[TokenData]:
        """Verify a session token and return its claims"""
        try:
            # Check if token was revoked by logout
            if await self.session_store.get(f"blacklist:{token}"):
                return None

            payload = jwt.decode(token, settings.secret_key, algorithms=[settings.ALGORITHM])
            return TokenData(**payload)
        except (JWTError, ValidationError):
            return None

    async def revoke_token(self, token: str) -> None:
        """Blacklist a token until it would have expired anyway"""
        try:
            claims = jwt.get_unverified_claims(token)
            expires_in = int(claims.get("exp", 0) - datetime.now(timezone.utc).timestamp())
        except JWTError:
            return

        if expires_in > 0:
            await self.session_store.setex(f"blacklist:{token}", expires_in, "1")

    async def authenticate(self, token: str) -> Optional[User]:
        """Resolve a token to a user row, registering the user on first sight"""
        token_data = await self.verify_token(token)
        if token_data is None:
            return None

        return await UserService(self.db).upsert_user(
            user_id=token_data.sub,
            email=token_data.email,
            username=token_data.username,
            first_name=token_data.first_name,
            last_name=token_data.last_name,
            profile_image_url=token_data.profile_image_url,
        )

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    session_store=Depends(get_session_store),
) -> User:
    """Dependency to get current authenticated user"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    auth_service = AuthService(db, session_store)
    user = await auth_service.authenticate(credentials.credentials)

    if user is None:
        raise credentials_exception

    return user
