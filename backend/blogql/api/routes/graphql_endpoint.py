import logging
from ariadne import graphql_sync
from ariadne.explorer import ExplorerGraphiQL
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from blogql.api.context import build_context
from blogql.api.schema import schema
from blogql.core.config import settings
from blogql.core.database import get_db
from blogql.core.exceptions import format_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["graphql"])

explorer_html = ExplorerGraphiQL(title="blogql").html(None)


@router.get("/graphql", response_class=HTMLResponse)
async def graphql_explorer():
    """GraphiQL explorer for interactive queries"""
    return explorer_html


@router.post("/graphql")
async def graphql_server(request: Request, db: Session = Depends(get_db)):
    """Execute a GraphQL operation.

    Resolver errors are part of a 200 response; only unparseable or invalid
    operations get a 400. Resolvers hash passwords and block on the store,
    so execution runs in the threadpool instead of on the event loop.
    """
    try:
        data = await request.json()
    except ValueError:
        return JSONResponse(
            {"errors": [{"message": "Request body is not valid JSON"}]},
            status_code=400,
        )

    success, result = await run_in_threadpool(
        graphql_sync,
        schema,
        data,
        context_value=build_context(request, db),
        debug=settings.DEBUG,
        error_formatter=format_error,
    )
    return JSONResponse(result, status_code=200 if success else 400)
