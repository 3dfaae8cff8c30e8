from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.error_handler import custom_exception_handler, request_validation_exception_handler
from app.core.exceptions import BaseAPIException
from app.core.log_config import logger

from app.api.auth import router as auth_router
from app.api.rooms import router as room_router
from app.api.users import router as user_router
from app.database.postgres import dispose_db, initialize_db
from app.dependencies.auth_dependencies import RENEWED_TOKEN_HEADER
from app.utils.timing_middleware import TimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    await initialize_db()
    logger.info("Database schema ready")
    yield
    await dispose_db()

app = FastAPI(title="Rooms API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],  
    allow_headers=["*"],  
    expose_headers=[RENEWED_TOKEN_HEADER],
)

app.add_exception_handler(BaseAPIException, custom_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_middleware(TimingMiddleware)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(room_router)
