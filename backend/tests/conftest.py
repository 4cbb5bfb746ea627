import os

# Configure before any blogql import reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""
os.environ["AUTH_HEADER_SCHEME"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogql.core.database import Base, get_db
from blogql.main import app
from blogql.models.post import Post  # noqa: F401
from blogql.models.user import User  # noqa: F401


@pytest.fixture
def session_factory():
    # One shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def gql(client):
    """Run a GraphQL operation and return the decoded response body"""
    def run(query, variables=None, token=None):
        headers = {"Authorization": token} if token else {}
        res = client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert res.status_code == 200, res.text
        return res.json()
    return run


SIGNUP = """
mutation Signup($name: String!, $email: String!, $password: String!) {
  signup(name: $name, email: $email, password: $password) { id name email isAdmin }
}
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token user { id name email isAdmin } }
}
"""


@pytest.fixture
def register(gql):
    """Sign up and log in a user; returns (user, token)"""
    def run(name="Alice", email="a@x.com", password="secret1"):
        body = gql(SIGNUP, {"name": name, "email": email, "password": password})
        assert "errors" not in body, body
        body = gql(LOGIN, {"email": email, "password": password})
        assert "errors" not in body, body
        return body["data"]["login"]["user"], body["data"]["login"]["token"]
    return run