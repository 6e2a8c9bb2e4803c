from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from passlib.context import CryptContext
from typing import Optional
from fritter.config import Config
import logging


password_context = CryptContext(
    schemes=["bcrypt"]
)

serializer = URLSafeTimedSerializer(
    secret_key=Config.SESSION_SECRET_KEY, salt="fritter-session"
)

def generate_password_hash(password: str) -> str:
    hash = password_context.hash(password)

    return hash

def verify_password(password: str, hash: str) -> bool:
    return password_context.verify(password, hash)

def create_session_token(data: dict) -> str:

    token = serializer.dumps(data)

    return token

def decode_session_token(token: str, max_age: Optional[int] = None) -> Optional[dict]:
    try:
        return serializer.loads(token, max_age=max_age or Config.SESSION_MAX_AGE)
    except SignatureExpired:
        logging.info("Session cookie has expired")
        return None
    except BadSignature:
        logging.info("Invalid session cookie signature")
        return None
