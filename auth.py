import hashlib
import hmac
import logging
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, Request
from pydantic import BaseModel

from database import BaseStore
from errors import Forbidden, InvalidCredentials, NotFound, Unauthorized

logger = logging.getLogger(__name__)

JWT_SECRET = os.getenv("JWT_SECRET", "gaushala-fresh-secret-key-2025-change-me")
JWT_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(days=7)
PBKDF2_ROUNDS = 100000


class Identity(BaseModel):
    id: str
    email: str
    role: str


# -------------------- Passwords --------------------

def hash_password(password: str, salt: Optional[str] = None) -> tuple[str, str]:
    if salt is None:
        salt = secrets.token_hex(16)
    pwd_hash = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ROUNDS
    ).hex()
    return pwd_hash, salt


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    pwd_hash, _ = hash_password(password, salt)
    return hmac.compare_digest(pwd_hash, expected_hash)


# -------------------- Tokens --------------------

def create_token(user: dict, secret: str = JWT_SECRET, expires_delta: timedelta = TOKEN_TTL) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user["id"],
        "email": user["email"],
        "role": user["role"],
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str = JWT_SECRET) -> Identity:
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")
    try:
        return Identity(id=payload["id"], email=payload["email"], role=payload["role"])
    except KeyError:
        raise Unauthorized("Invalid token")


def sanitize_user(user: dict) -> dict:
    return {"id": user["id"], "email": user["email"], "name": user.get("name", ""), "role": user["role"]}


# -------------------- Operations --------------------

def login(store: BaseStore, email: str, password: str) -> dict:
    user = next((u for u in store.read("users") if u.get("email") == email), None)
    if not user or not verify_password(password, user.get("salt", ""), user.get("passwordHash", "")):
        logger.warning("Failed login for %s", email)
        raise InvalidCredentials()
    logger.info("User %s logged in", email)
    return {"token": create_token(user), "user": sanitize_user(user)}


def me(store: BaseStore, identity: Identity) -> dict:
    user = next((u for u in store.read("users") if u.get("id") == identity.id), None)
    if not user:
        raise NotFound("User not found")
    return sanitize_user(user)


# -------------------- Dependencies --------------------

def auth_dependency(authorization: Optional[str] = Header(None)) -> Identity:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthorized("No token provided")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise Unauthorized("No token provided")
    return decode_token(token)


def require_role(role: str):
    def dependency(request: Request, identity: Identity = Depends(auth_dependency)) -> Identity:
        if identity.role != role:
            raise Forbidden(f"{role.capitalize()} access required")
        request.state.identity = identity
        return identity
    return dependency


require_admin = require_role("admin")
