from typing import Annotated, Type, TypeVar
from pydantic import BaseModel, EmailStr, StringConstraints, ValidationError
from blogql.core.exceptions import UserInputError

InputModel = TypeVar("InputModel", bound=BaseModel)

# Surrounding whitespace is dropped before the emptiness check
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# Passwords are taken verbatim
Password = Annotated[str, StringConstraints(min_length=1)]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class SignupInput(BaseModel):
    name: RequiredText
    email: EmailStr
    password: Password


class LoginInput(BaseModel):
    email: Annotated[str, StringConstraints(strip_whitespace=True)]
    password: str


class PostInput(BaseModel):
    title: RequiredText
    body: RequiredText
    image: str


class ProfileInput(BaseModel):
    name: RequiredText
    email: EmailStr


class PasswordChangeInput(BaseModel):
    old_password: str
    new_password: Password


def parse_input(model: Type[InputModel], **arguments) -> InputModel:
    """Validate resolver arguments, raising UserInputError with per-field details.

    Detail keys are the camelCase GraphQL argument names.
    """
    try:
        return model(**arguments)
    except ValidationError as e:
        details = {}
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "input"
            details[_camel(field)] = error["msg"]
        raise UserInputError("Invalid input", details) from e
