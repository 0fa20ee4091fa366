from typing import Iterable, Optional
from fastapi import Depends, HTTPException, status

from geosocial.config import settings
from geosocial.models.user import User
from geosocial.services.auth_service import get_current_user

class AdminPolicy:
    """Answers whether a principal may moderate everyone's content"""

    def __init__(self, admin_emails: Iterable[str]):
        self.admin_emails = {email.strip().lower() for email in admin_emails if email.strip()}

    def is_admin(self, email: Optional[str]) -> bool:
        if not email:
            return False
        return email.strip().lower() in self.admin_emails

def get_admin_policy() -> AdminPolicy:
    return AdminPolicy(settings.admin_emails)

async def require_admin(
    current_user: User = Depends(get_current_user),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
) -> User:
    """Dependency that only lets admins through"""
    if not admin_policy.is_admin(current_user.email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Admin access required"
        )
    return current_user
