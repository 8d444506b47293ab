"""Session management for the signed-in shopper"""

import json
import logging
from typing import Any, Optional

from ..storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class AuthSession:
    """
    Token and profile of the signed-in user.

    Kept in the same storage as the cart so a reload keeps the user signed
    in. The token is what `StorefrontClient` sends as `Authorization`.
    """

    TOKEN_KEY = "token"
    USER_KEY = "userDetail"

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.token: Optional[str] = None
        self.user: Optional[dict[str, Any]] = None
        self._load()

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token)

    def get_token(self) -> Optional[str]:
        return self.token

    def login(self, token: str, user: dict[str, Any]) -> None:
        """Start a session"""
        self.token = token
        self.user = dict(user)
        try:
            self.storage.set(self.TOKEN_KEY, token)
            self.storage.set(self.USER_KEY, json.dumps(self.user))
        except Exception as e:
            logger.error(f"Error saving session: {e}")

    def logout(self) -> None:
        """End the session"""
        self.token = None
        self.user = None
        try:
            self.storage.remove(self.TOKEN_KEY)
            self.storage.remove(self.USER_KEY)
        except Exception as e:
            logger.error(f"Error clearing session: {e}")

    def update_user(self, **fields: Any) -> None:
        """Merge profile changes into the stored user"""
        if self.user is None:
            return
        self.user.update(fields)
        try:
            self.storage.set(self.USER_KEY, json.dumps(self.user))
        except Exception as e:
            logger.error(f"Error saving user profile: {e}")

    def _load(self) -> None:
        try:
            token = self.storage.get(self.TOKEN_KEY)
            user_detail = self.storage.get(self.USER_KEY)
        except Exception as e:
            logger.warning(f"Session storage unavailable: {e}")
            return

        if not token or not user_detail:
            return

        try:
            user = json.loads(user_detail)
        except ValueError:
            logger.warning("Stored user detail is not valid JSON, ignoring session")
            return

        if isinstance(user, dict):
            self.token = token
            self.user = user
