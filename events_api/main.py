import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from events_api.config import get_settings
from events_api.controllers.drivers import router as drivers_router
from events_api.controllers.event_view import router as event_view_router
from events_api.controllers.events import router as events_router
from events_api.controllers.health import router as health_router
from events_api.controllers.volunteers import router as volunteers_router
from events_api.errors import register_exception_handlers
from events_api.lifespan import cleanup_resources, setup_resources
from events_api.middleware import HTTPLogMiddleware

settings = get_settings()

app = FastAPI(title="Volunteer Events API", version="1.0.0")
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_origin_regex=settings.cors.origins_regex or None,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.debug.request:
    logging.getLogger("events_api.http").setLevel(logging.DEBUG)
    app.add_middleware(HTTPLogMiddleware)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    resources = await setup_resources()
    try:
        yield
    finally:
        await cleanup_resources(resources)

app.router.lifespan_context = lifespan

app.include_router(health_router)
app.include_router(events_router)
app.include_router(volunteers_router)
app.include_router(drivers_router)
app.include_router(event_view_router)
