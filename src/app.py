"""Recipes FastAPI application.

Composition root: initializes the recipes domain, builds the single
RatingAggregator the API uses, and wraps every request in the domain
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from recipes.api import favorite_router, recipe_router, register_error_handlers
from recipes.domain import recipes
from recipes.review.aggregation import RatingAggregator

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay (providers, event processing).
recipes.init()


def create_app(domain=recipes, max_attempts=None) -> FastAPI:
    app = FastAPI(
        title="Recipes API",
        description="Recipe catalogue with reviews and running ratings",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with domain.domain_context():
            return await call_next(request)

    app.state.rating_aggregator = RatingAggregator(domain, max_attempts=max_attempts)

    app.include_router(recipe_router)
    app.include_router(favorite_router)
    register_exception_handlers(app)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app


app = create_app()
