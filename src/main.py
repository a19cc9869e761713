from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.database.mongo_client import close_mongo
from src.infrastructure.api.middlewares import add_default_middlewares, add_exception_handlers
from src.infrastructure.api.routes.posts_routes import router as posts_router
from src.infrastructure.api.routes.profile_routes import router as profile_router
from src.infrastructure.api.routes.users_routes import router as users_router


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_mongo()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        lifespan=lifespan,
        title="DevConnect Backend",
        version="0.1.0",
        description="""
        ## DevConnect Backend API

        Social network backend for developers: accounts, profiles with work
        experience and education, and posts with likes and comments. Data is
        stored in MongoDB (or an in-memory store when no MONGO_URI is set).

        ### Features
        - **Users**: Registration, login and the current user
        - **Profiles**: Create/edit a profile, experience and education entries, public lookup by handle or user
        - **Posts**: Publish, like/unlike, comment and delete

        ### Authentication
        Private endpoints require the token returned by `/api/users/login`
        in the Authorization header:
        ```
        Authorization: Bearer your-jwt-token
        ```

        ### Error Responses
        Errors are JSON objects keyed by field, for example
        `{"email": "Email is invalid"}`:
        - **400 Bad Request**: Field validation failed or the request conflicts with existing data
        - **401 Unauthorized**: Missing or invalid token, or not the owner of the resource
        - **404 Not Found**: Requested resource does not exist
        - **422 Unprocessable Entity**: Malformed request body
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    add_default_middlewares(app)
    add_exception_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the DevConnect API",
        response_description="API information including status and version",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "devconnect-backend", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
        response_description="Health status of the API service",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(users_router)
    app.include_router(profile_router)
    app.include_router(posts_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 5000))
    uvicorn.run(app, host="0.0.0.0", port=port)
