from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from blogql.core.config import settings

# SQLite connections are bound to the creating thread unless told otherwise;
# FastAPI may run a request's dependencies and handler on different threads
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create database engine - manages connection pool
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Create session factory - each request gets a new session
# autocommit=False: Changes require explicit commit
# autoflush=False: Don't auto-flush before queries
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.

    The GraphQL route hands this session to the request context, so every
    resolver in one request shares it. The session is closed after the
    request completes, even if a resolver raised.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
