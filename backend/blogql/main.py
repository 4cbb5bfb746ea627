import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from blogql.core.config import settings
from blogql.core.database import engine, Base
from blogql.api.routes import graphql_endpoint

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create tables and announce where the API is served
    """
    # In production, use migrations (Alembic) instead of create_all
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")
    logger.info(f"Server ready at {settings.get_server_url()}")
    yield
    logger.info("Server stopped")


app = FastAPI(
    title="blogql",
    description="GraphQL API for a blog: accounts, authentication and posts",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - allows browser clients on other origins to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graphql_endpoint.router)


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {"message": "blogql API", "version": "1.0.0", "graphql": "/graphql"}


@app.get("/health")
async def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}


def run():
    """Start the HTTP server (console entry point)"""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
