"""
Main entry point for the FastAPI server.

This module defines the FastAPI application, its routers and lifecycle
management. Configuration comes from environment variables (see
app.Core.Config.server.ServerConfig) and can be overridden from the
command line with --host, --port and --reload.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.Core.Exceptions.handlers import register_exception_handlers
from app.dependencies import close_clients, get_email_relay_service, server_config
from app.Http.Routes.appointments import router as appointments_router
from app.Http.Routes.barbers import router as barbers_router
from app.Http.Routes.customers import router as customers_router
from app.Http.Routes.edge_functions import router as edge_functions_router
from app.Http.Routes.launcher import router as launcher_router
from app.Http.Routes.notifications import router as notifications_router
from app.Http.Routes.queue import router as queue_router
from app.Http.Routes.ws.appointments import router as appointments_ws_router

# Configure loguru
logger.remove()
logger.add(
    sys.stderr,
    level="DEBUG",
    format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    enqueue=True,
    backtrace=True,
    diagnose=True,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan manager. Reports the active email provider on startup
    and closes outbound HTTP sessions on shutdown.
    """
    logger.info(f"Email relay provider: {get_email_relay_service().provider}")
    try:
        yield
    finally:
        await close_clients()


app: FastAPI = FastAPI(
    lifespan=lifespan,
    title="BarberBook API",
    description="Booking, check-in and queue API for the barbershop app, plus the email and TTS relays.",
    version="1.0.0",
)

# Register custom exception handlers for standardized error responses
register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(launcher_router)
app.include_router(customers_router)
app.include_router(appointments_router)
app.include_router(barbers_router)
app.include_router(queue_router)
app.include_router(notifications_router)
app.include_router(edge_functions_router)
app.include_router(appointments_ws_router)


@app.get("/health", summary="Health check")
async def health():
    return {"status": "ok"}


def parse_server_args():
    """Parse server-specific arguments, ignoring anything else on the command line."""
    import argparse

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--host", help="Server host")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    server_args, _ = parser.parse_known_args()

    if server_args.host:
        server_config.host = server_args.host
    if server_args.port:
        server_config.port = server_args.port
    if server_args.reload:
        server_config.reload = server_args.reload


if __name__ == "__main__":
    import uvicorn

    parse_server_args()
    logger.info("Starting FastAPI server")
    uvicorn.run(
        "main:app",
        host=server_config.host,
        port=server_config.port,
        reload=server_config.reload,
    )
