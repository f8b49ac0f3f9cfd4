"""
Dependency injection for FastAPI endpoints.
"""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from app.core.config import settings
from app.core.scoring.ai_judge import AIJudge

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/employee/login")


def get_current_employee_id(token: str = Depends(oauth2_scheme)) -> int:
    """
    Get the authenticated employee's id from the JWT token.

    Args:
        token: JWT token

    Returns:
        Employee id (the ``createdBy`` of tests, invitations and results)

    Raises:
        HTTPException: If token is invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        employee_id: Optional[str] = payload.get("sub")
        if employee_id is None:
            raise credentials_exception
        return int(employee_id)
    except (JWTError, ValueError):
        raise credentials_exception


def get_ai_judge() -> AIJudge:
    """AI judge for written answers."""
    return AIJudge()
