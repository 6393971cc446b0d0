from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt

from sitecms.config import settings
from sitecms.exceptions import AuthenticationError, AuthorizationError

# Initialize logging
logger = logging.getLogger(__name__)

# OAuth2 scheme for token validation. Tokens are issued elsewhere; this
# service only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a verified access token"""

    username: str
    role: Optional[str] = None


# Function to create an access token with an expiration time (dev tooling and tests)
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})

    if "sub" not in to_encode:
        raise ValueError("Missing 'sub' claim (email or username) in token data.")

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


# Function to decode an access token
def decode_access_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        logger.warning("Token expired")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise AuthenticationError("Invalid token")

    username = payload.get("sub")
    if username is None:
        logger.warning("Token is missing 'sub' claim")
        raise AuthenticationError("Token does not contain 'sub' field.")

    return CurrentUser(username=username, role=payload.get("role"))


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)) -> CurrentUser:
    user = decode_access_token(token)
    # picked up by the access log
    request.state.user = user
    return user


# Dependency factory: the current user, provided their role is one of `required_roles`
def require_role(required_roles: List[str]) -> Callable[..., CurrentUser]:
    async def role_validator(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in required_roles:
            logger.warning("Role '%s' denied; required one of %s", user.role, required_roles)
            raise AuthorizationError(
                f"Role '{user.role or 'None'}' does not have access to this resource.",
                required_role=", ".join(required_roles),
            )
        return user

    return role_validator
