import logging

from ariadne import MutationType, QueryType
from sqlalchemy.exc import IntegrityError

from blogql.api.context import RequestContext
from blogql.api.inputs import LoginInput, SignupInput, parse_input
from blogql.core.config import settings
from blogql.core.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InvalidCredentialsError,
    NotFoundError,
)
from blogql.core.security import (
    claims_for_user,
    create_access_token,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)

query = QueryType()
mutation = MutationType()


def is_bootstrap_admin(email: str, password: str) -> bool:
    """Check a signup against the configured admin email/password pair.

    Compares the plaintext password, not a hash. An unset pair matches nobody.
    """
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return False
    return email == settings.ADMIN_EMAIL and password == settings.ADMIN_PASSWORD


@query.field("me")
def resolve_me(_, info):
    context: RequestContext = info.context
    claims = context.require_claims("Unauthenticated user")

    # Claims can outlive the account, so read the live row
    user = context.users.get_by_id(claims.id)
    if user is None:
        raise NotFoundError("User not found", {"me": "User not exists"})
    return user


@mutation.field("signup")
def resolve_signup(_, info, name, email, password):
    context: RequestContext = info.context
    data = parse_input(SignupInput, name=name, email=email, password=password)

    if context.users.get_by_email(data.email):
        raise DuplicateAccountError()

    try:
        user = context.users.create(
            name=data.name,
            email=data.email,
            password=get_password_hash(data.password),
            is_admin=is_bootstrap_admin(data.email, data.password),
        )
    except IntegrityError:
        # Another signup with the same email won the race
        raise DuplicateAccountError()

    logger.info(f"User signed up: {user.id} (admin={user.is_admin})")
    return user


@mutation.field("login")
def resolve_login(_, info, email, password):
    context: RequestContext = info.context
    data = parse_input(LoginInput, email=email, password=password)

    user = context.users.get_by_email(data.email)
    if user is None:
        raise AccountNotFoundError()

    if not verify_password(data.password, user.password):
        logger.info(f"Failed login for user {user.id}")
        raise InvalidCredentialsError()

    token = create_access_token(claims_for_user(user))
    logger.info(f"User logged in: {user.id}")
    return {"user": user, "token": token}
