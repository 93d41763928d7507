# agentchat/api/auth.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from agentchat.database import get_db
from agentchat.services.auth_service import AuthService
from agentchat.models.user import User

# Setup security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from a JWT token.
    The user record is created on first use.
    """
    return AuthService(db).authenticate(credentials.credentials)
