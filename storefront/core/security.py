import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.core.config import settings
from storefront.core.errors import AuthorizationError


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/admin/login")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def authenticate_admin(email: str, password: str) -> str:
    """check the configured administrator credential, returning the identity."""
    if not email or not password or not settings.ADMIN_PASSWORD_HASH:
        raise AuthorizationError()
    email_ok = hmac.compare_digest(email.strip().lower(), settings.ADMIN_EMAIL.strip().lower())
    # always run the hash check so timing does not reveal the email
    password_ok = verify_password(password, settings.ADMIN_PASSWORD_HASH)
    if not (email_ok and password_ok):
        raise AuthorizationError()
    return settings.ADMIN_EMAIL


def create_access_token(subject: str, role: str = "admin", expires_delta: Optional[timedelta] = None) -> str:
    to_encode = {
        "sub": subject,
        "role": role,
        "iat": int(datetime.now(tz=timezone.utc).timestamp()),
    }
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRES_MIN))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm="HS256")


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from e


def require_admin(token: str = Depends(oauth2_scheme)) -> str:
    """resolve the bearer token to the administrator identity."""
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    if payload.get("role") != "admin" or sub != settings.ADMIN_EMAIL:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="admin only")
    return sub
