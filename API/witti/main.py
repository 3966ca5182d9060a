from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from witti.api.auth import router as auth_router
from witti.api.catalog import router as catalog_router
from witti.api.health import router as health_router
from witti.api.my import router as my_router
from witti.api.payments import router as payments_router
from witti.core.bootstrap import initialize_database
from witti.core.errors import (
    http_exception_handler,
    request_id_middleware,
    unhandled_exception_handler,
    validation_exception_handler,
)
from witti.core.logging import configure_logging
from witti.core.settings import settings
from witti.db.database import SessionLocal, engine

configure_logging(settings.log_level)

app = FastAPI(title="WITTI API", version="1.0.0")
app.include_router(health_router)
app.include_router(catalog_router)
app.include_router(auth_router)
app.include_router(payments_router)
app.include_router(my_router)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
async def on_startup():
    async with SessionLocal() as session:
        await initialize_database(session, engine)


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
