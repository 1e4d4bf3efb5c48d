"""Cache data models for the API key helper.

Contains Pydantic models for the helper cache:
- CachedCredential: One cached helper result, stored as JSON
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, SecretStr, field_serializer, field_validator


class CachedCredential(BaseModel):
    """An API key produced by a helper command, with its fetch time."""

    secret: SecretStr  # masked in repr() and str()
    fetched_at: datetime  # timezone-aware UTC
    source_command: str  # the helper command that produced the key

    @field_validator("secret")
    @classmethod
    def _require_secret(cls, value: SecretStr) -> SecretStr:
        secret = value.get_secret_value().strip()
        if not secret:
            raise ValueError("secret is empty")
        return SecretStr(secret)

    @field_serializer("secret", when_used="json")
    def _dump_secret(self, value: SecretStr) -> str:
        return value.get_secret_value()

    def age_seconds(self, now: Optional[datetime] = None) -> float:
        """Return how many seconds ago the key was fetched.

        Args:
            now: Reference time. Defaults to the current UTC time.

        Returns:
            Age in seconds (negative if fetched_at lies in the future).
        """
        now = now or datetime.now(timezone.utc)
        fetched_at = self.fetched_at
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return (now - fetched_at).total_seconds()
