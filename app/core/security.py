from passlib.context import CryptContext
from datetime import datetime, timedelta
from uuid import UUID
import jwt
from ..core.config import settings
from ..core.exceptions import InvalidTokenException, TokenExpiredException
from ..schemas.auth import CallerIdentity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.
    """
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(identity: CallerIdentity, expires_delta: timedelta = None) -> str:
    """
    Create a signed JWT for the given identity.

    Args:
        identity: The user the token speaks for
        expires_delta: Optional lifetime, defaults to ``jwt_expiry_hours``

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_expiry_hours)
    to_encode = {
        "user_id": str(identity.user_id),
        "username": identity.username,
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)

def verify_token(token: str) -> CallerIdentity:
    """
    Verify a JWT and extract the identity it carries.

    Raises:
        TokenExpiredException: If the token's expiry has passed
        InvalidTokenException: If the token is malformed, badly signed
            or does not carry a usable identity
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise TokenExpiredException()
    except jwt.PyJWTError:
        raise InvalidTokenException()

    user_id = payload.get("user_id")
    username = payload.get("username")
    if not isinstance(user_id, str) or not username:
        raise InvalidTokenException()
    try:
        return CallerIdentity(user_id=UUID(user_id), username=username)
    except (TypeError, ValueError):
        raise InvalidTokenException()
