from __future__ import annotations

import logging
from typing import Optional, Protocol

from firebase_admin import auth

from ..core.exceptions import AuthenticationError

log = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def resolve_user_id(self, id_token: Optional[str]) -> str:
        """Verify ``id_token`` and return the opaque user id."""

        raise NotImplementedError


class FirebaseIdentityProvider(IdentityProvider):
    """Use case: turn a Firebase Auth ID token into a user id (uid).

    Sign-up, sign-in and password reset stay on the client with Firebase Auth;
    the server only verifies the token it is handed.
    """

    def __init__(self, app=None, *, check_revoked: bool = False):
        self._app = app
        self._check_revoked = check_revoked

    def resolve_user_id(self, id_token: Optional[str]) -> str:
        if not id_token or not id_token.strip():
            raise AuthenticationError("Missing identity token")

        try:
            decoded = auth.verify_id_token(id_token.strip(), app=self._app, check_revoked=self._check_revoked)
        except (auth.InvalidIdTokenError, auth.UserDisabledError, auth.CertificateFetchError, ValueError) as exc:
            log.info("Rejected identity token: %s", exc)
            raise AuthenticationError("Invalid or expired identity token") from exc

        uid = decoded.get("uid")
        if not uid:
            raise AuthenticationError("Identity token has no user id")
        return str(uid)
