"""Gestion des tokens JWT (HS256, clé partagée SECRET_KEY)."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import jwt, JWTError

from dentaltrack.core.config import settings


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Crée un token JWT d'accès signé.

    Args:
        data: Claims à encoder (sub, email, role...)
        expires_delta: Durée de validité personnalisée

    Returns:
        Token JWT signé
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    # Claims standards JWT
    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "iss": settings.TOKEN_ISSUER,
        "type": "access"
    })

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """Crée un token d'accès pour un utilisateur (claims sub/email/role)."""
    return create_access_token(
        data={
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
        },
        expires_delta=expires_delta,
    )


def verify_token(token: str, token_type: str = "access") -> Dict[str, Any]:
    """
    Vérifie et décode un token JWT.

    Raises:
        JWTError: Si le token est invalide, expiré ou de mauvais type
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=settings.TOKEN_ISSUER,
            options={"require_exp": True, "require_iat": True},
        )
    except JWTError as e:
        raise JWTError(f"Token validation failed: {str(e)}")

    if payload.get("type") != token_type:
        raise JWTError(f"Token type mismatch. Expected {token_type}")

    return payload
