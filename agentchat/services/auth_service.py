# agentchat/services/auth_service.py
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
import jwt

from agentchat.models.user import User
from agentchat.config import get_settings


class AuthService:
    """Service for verifying bearer tokens and mapping them to User records"""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a JWT token using the configured secret and return its payload.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM],
                audience=self.settings.JWT_AUDIENCE
            )
        except jwt.PyJWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token"
            )

        if not payload.get("sub"):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: missing subject"
            )

        return payload

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve a User record by ID.
        """
        return self.db.query(User).filter(User.id == user_id).first()

    def get_or_create_user(self, payload: Dict[str, Any]) -> User:
        """
        Return the user named by a verified token, creating the record on first sight.
        """
        user = self.get_user_by_id(payload["sub"])
        if user:
            return user

        user = User(id=payload["sub"], email=payload.get("email"))
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def authenticate(self, token: str) -> User:
        """Verify a token and return its user"""
        return self.get_or_create_user(self.verify_token(token))
