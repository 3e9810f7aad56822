"""chclient Credentials Domain Model - Default credentials of a configuration."""

from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Immutable user/password pair, or an access token.

    Attributes:
        user: User name, may be empty but never None
        password: Password, never shown in repr
        access_token: Optional access token used instead of a password
    """

    user: str = ""
    password: str = field(default="", repr=False)
    access_token: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        if self.user is None:
            raise ConfigurationError("user", None, "User name cannot be None")
        if self.password is None:
            object.__setattr__(self, "password", "")

    @classmethod
    def from_user_and_password(cls, user: str, password: Optional[str]) -> "Credentials":
        """Create credentials from user name and optional password."""
        return cls(user=user, password=password or "")

    @classmethod
    def from_access_token(cls, token: str) -> "Credentials":
        """Create credentials backed by an access token."""
        if not token:
            raise ConfigurationError("access_token", token, "Access token cannot be empty")
        return cls(access_token=token)

    @property
    def use_access_token(self) -> bool:
        """Return True if these credentials carry an access token."""
        return self.access_token is not None
