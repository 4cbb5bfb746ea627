"""
Per-request GraphQL context.

The context holds the request's database session and, when the caller sent
a valid token, the signed claims of the current user. Nothing here is
shared between requests.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from blogql.core.config import settings
from blogql.core.exceptions import AuthenticationError, InvalidTokenError
from blogql.core.security import TokenClaims, claims_from_token
from blogql.repositories.posts import PostRepository
from blogql.repositories.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    db: Session
    claims: Optional[TokenClaims] = None
    # Set when a token was sent but failed verification
    token_error: Optional[AuthenticationError] = None
    request: Any = None

    @property
    def users(self) -> UserRepository:
        return UserRepository(self.db)

    @property
    def posts(self) -> PostRepository:
        return PostRepository(self.db)

    def require_claims(self, message: str = "Unauthenticated", details: Optional[dict] = None) -> TokenClaims:
        """Return the current user's claims or raise an authentication error.

        A rejected token is reported as such rather than as a missing login.
        """
        if self.token_error is not None:
            raise self.token_error
        if self.claims is None:
            raise AuthenticationError(message, details)
        return self.claims


def extract_token(authorization: Optional[str], scheme: str = "") -> Optional[str]:
    """Pull the token out of an Authorization header value.

    With no scheme configured the whole header is the token. With a scheme
    (e.g. "Bearer") the header must read "<scheme> <token>".
    """
    if not authorization or not authorization.strip():
        return None
    if not scheme:
        return authorization.strip()

    prefix, _, token = authorization.strip().partition(" ")
    if prefix.lower() != scheme.lower() or not token.strip():
        raise InvalidTokenError(f"Authorization header must use the {scheme} scheme")
    return token.strip()


def build_context(request: Any, db: Session) -> RequestContext:
    """Build the context for one GraphQL request.

    Token failures don't fail the request: public queries still resolve, and
    resolvers that need a user raise the stored error.
    """
    context = RequestContext(db=db, request=request)
    authorization = request.headers.get("authorization") if request is not None else None
    try:
        token = extract_token(authorization, settings.AUTH_HEADER_SCHEME)
        if token is not None:
            context.claims = claims_from_token(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected auth token: {e.message}")
        context.token_error = e
    return context
