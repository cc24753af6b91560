# evercare/services/review_service/app.py
"""
FastAPI приложение Review Service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from evercare.common.logger import log_info, setup_logging
from evercare.common.constants import TypeMsg
from evercare.config import settings
from evercare.infra.database import close_db, get_db, init_db
from evercare.services.review_service.routes import router
from evercare.shared.models.common import HealthStatus
from evercare.shared.web import add_cors, build_health, install_error_handlers

SERVICE_NAME = "review_service"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    await log_info("Review Service запускается...", type_msg=TypeMsg.INFO)
    await init_db()
    yield
    await close_db()
    await log_info("Review Service остановлен", type_msg=TypeMsg.INFO)


app = FastAPI(
    title="Review Service",
    description="Отзывы careseeker о caregiver и средний рейтинг",
    version=settings.system.VERSION,
    lifespan=lifespan,
)

add_cors(app)
install_error_handlers(app, SERVICE_NAME)
app.include_router(router)


@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    return await build_health(SERVICE_NAME, get_db())
