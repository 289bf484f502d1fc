"""
Module Management GraphQL Service

FastAPI + Strawberry GraphQL service exposing the administrative
module management namespace (admin.modulesManagement).
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from module_management import __version__
from module_management.core.config import Settings, get_settings
from module_management.core.logging import setup_logger
from module_management.schema import create_graphql_router
from module_management.services.module_service import (
    ModuleManagementService,
    get_module_service,
)


# Settings and logger
settings = get_settings()
logger = setup_logger("module_management", "INFO" if not settings.debug else "DEBUG")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.service_name} starting up...")
    logger.info(f"📊 Environment: {settings.environment}")
    logger.info(f"📦 Catalog: {settings.catalog_path or 'in-memory sample data'}")
    logger.info(f"🌐 GraphQL endpoint: http://{settings.host}:{settings.port}/graphql")
    yield
    logger.info(f"🛑 {settings.service_name} shutting down...")


async def get_context(
    settings: Settings = Depends(get_settings),
    module_service: ModuleManagementService = Depends(get_module_service),
):
    """Request context shared by all resolvers"""
    return {
        "settings": settings,
        "module_service": module_service,
    }


# FastAPI app
app = FastAPI(
    title="Module Management GraphQL",
    description="Administrative module management service - GraphQL",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Instrumentator().instrument(app).expose(app)

# GraphQL router
graphql_router = create_graphql_router(context_getter=get_context)
app.include_router(graphql_router, prefix="/graphql")


@app.get("/health")
async def health_check(module_service: ModuleManagementService = Depends(get_module_service)):
    """Health check endpoint"""
    installed = await module_service.installed_modules()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "installed_modules": len(installed)
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": __version__,
        "graphql": "/graphql",
        "graphiql": "/graphql (browser)"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "module_management.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
