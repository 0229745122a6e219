"""DTOs for :class:`~storefront.services.accounts.service.AccountService`."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.services.tokens.dto import TokenPair
from storefront.services.users.dto import UserOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for signup.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param name: Display name; defaults to the email's local part.
    :type name: str | None
    """

    email: str
    password: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class PasswordResetIn:
    """
    Input DTO for consuming a password-reset token.

    :param token: Encoded reset JWT from the emailed link.
    :param new_password: Raw replacement password.
    """

    token: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Result of a transition into the Authenticated state.

    :param user: The authenticated user.
    :param tokens: Freshly issued pair; its refresh token is already registered.
    """

    user: UserOut
    tokens: TokenPair
