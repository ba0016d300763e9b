"""
Authentication Service

Handles user registration, login, password reset tokens and JWT issuance.
"""

import secrets
from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
import jwt
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from jobtracker.config import Config
from jobtracker.db.mongo import get_database
from jobtracker.utils.logger import get_logger
from jobtracker.utils.exceptions import AgentError
from jobtracker.utils.datetime_utils import utc_now, to_utc

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"


class AuthService:
    """Service for managing users and JWT tokens"""

    def __init__(self, config: Config, db: Optional[Database] = None):
        self.config = config
        self.db = db if db is not None else get_database(config)
        self.users = self.db["users"]
        self.jwt_secret = config.auth.jwt_secret
        self.jwt_refresh_secret = config.auth.jwt_refresh_secret

    def ensure_indexes(self) -> None:
        self.users.create_index("email", unique=True)
        self.users.create_index("password_reset_token", sparse=True)

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except Exception as e:
            logger.error(f"[AuthService] Password verification error: {str(e)}")
            return False

    def generate_token(self, user_id: str) -> str:
        now = utc_now()
        payload = {
            "user_id": user_id,
            "exp": now + timedelta(hours=self.config.auth.jwt_expiration_hours),
            "iat": now,
        }
        return jwt.encode(payload, self.jwt_secret, algorithm=JWT_ALGORITHM)

    def generate_refresh_token(self, user_id: str) -> str:
        now = utc_now()
        payload = {
            "user_id": user_id,
            "exp": now + timedelta(days=self.config.auth.jwt_refresh_expiration_days),
            "iat": now,
        }
        return jwt.encode(payload, self.jwt_refresh_secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(token, self.jwt_secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.warning("[AuthService] Token has expired")
            return None
        except jwt.InvalidTokenError:
            return None

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Create a user and issue an access token.

        Raises:
            AgentError: If the email is already registered
        """
        email = email.strip().lower()
        if self.users.find_one({"email": email}):
            raise AgentError("Email already exists", "auth")

        now = utc_now()
        user_doc = {
            "name": name,
            "email": email,
            "password": self.hash_password(password),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = self.users.insert_one(user_doc)
        except DuplicateKeyError:
            raise AgentError("Email already exists", "auth")

        user_id = str(result.inserted_id)
        logger.info(f"[AuthService] ✅ Registered user {user_id}")
        return {
            "user": {"id": user_id, "name": name, "email": email},
            "token": self.generate_token(user_id),
        }

    def login(self, email: str, password: str) -> Dict[str, str]:
        """
        Check credentials and issue access + refresh tokens.

        Raises:
            AgentError: Unknown user or wrong password
        """
        user = self.users.find_one({"email": email.strip().lower()})
        if not user:
            raise AgentError("User not found", "auth")
        if not user.get("password"):
            raise AgentError("User password not set", "auth")
        if not self.verify_password(password, user["password"]):
            raise AgentError("Invalid credentials", "auth")

        user_id = str(user["_id"])
        logger.info(f"[AuthService] ✅ Login successful for user {user_id}")
        return {
            "token": self.generate_token(user_id),
            "refreshToken": self.generate_refresh_token(user_id),
        }

    def forgot_password(self, email: str) -> str:
        """Issue a one-hour password reset token. No e-mail is sent; the token is returned."""
        user = self.users.find_one({"email": email.strip().lower()})
        if not user:
            raise AgentError("User not found", "auth")

        reset_token = secrets.token_hex(32)
        expires = utc_now() + timedelta(minutes=self.config.auth.password_reset_expiration_minutes)
        self.users.update_one(
            {"_id": user["_id"]},
            {"$set": {"password_reset_token": reset_token, "password_reset_expires": expires}},
        )
        logger.info(f"[AuthService] Password reset token generated for user {user['_id']}")
        return reset_token

    def reset_password(self, token: str, new_password: str) -> None:
        """
        Raises:
            AgentError: If the reset token is unknown or expired
        """
        user = self.users.find_one({"password_reset_token": token})
        expires = user.get("password_reset_expires") if user else None
        if not user or not expires or to_utc(expires) <= utc_now():
            raise AgentError("Invalid or expired token", "auth")

        self.users.update_one(
            {"_id": user["_id"]},
            {
                "$set": {"password": self.hash_password(new_password), "updated_at": utc_now()},
                "$unset": {"password_reset_token": "", "password_reset_expires": ""},
            },
        )
        logger.info(f"[AuthService] ✅ Password reset for user {user['_id']}")

