# evercare/services/jobposting_service/app.py
"""
FastAPI приложение Job Posting Service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from evercare.common.logger import log_info, setup_logging
from evercare.common.constants import TypeMsg
from evercare.config import settings
from evercare.infra.database import close_db, get_db, init_db
from evercare.services.jobposting_service.routes import notifications_router, router
from evercare.shared.models.common import HealthStatus
from evercare.shared.web import add_cors, build_health, install_error_handlers

SERVICE_NAME = "jobposting_service"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    await log_info("Job Posting Service запускается...", type_msg=TypeMsg.INFO)
    await init_db()
    yield
    await close_db()
    await log_info("Job Posting Service остановлен", type_msg=TypeMsg.INFO)


app = FastAPI(
    title="Job Posting Service",
    description="Объявления careseeker и уведомления об интересе caregiver",
    version=settings.system.VERSION,
    lifespan=lifespan,
)

add_cors(app)
install_error_handlers(app, SERVICE_NAME)
app.include_router(router)
app.include_router(notifications_router)


@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    return await build_health(SERVICE_NAME, get_db())
