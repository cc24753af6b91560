#!/usr/bin/env python3
# main.py
"""
Главная точка входа Evercare.
Запускает один микросервис или все сразу в зависимости от режима.
"""

from __future__ import annotations

import asyncio
import signal
import sys
from dataclasses import dataclass

from evercare.config import settings
from evercare.common.logger import setup_logging, log_info, log_error
from evercare.common.constants import TypeMsg


@dataclass(frozen=True)
class ServiceInfo:
    """Описание запускаемого микросервиса."""
    title: str
    app_path: str
    port_setting: str

    @property
    def port(self) -> int:
        return getattr(settings.deployment, self.port_setting)


SERVICES: dict[str, ServiceInfo] = {
    "booking_service": ServiceInfo(
        "Booking Service", "evercare.services.booking_service.app:app", "BOOKING_SERVICE_PORT"
    ),
    "jobposting_service": ServiceInfo(
        "Job Posting Service", "evercare.services.jobposting_service.app:app", "JOBPOSTING_SERVICE_PORT"
    ),
    "chat_service": ServiceInfo(
        "Chat Service", "evercare.services.chat_service.app:app", "CHAT_SERVICE_PORT"
    ),
    "profile_service": ServiceInfo(
        "Profile Service", "evercare.services.profile_service.app:app", "PROFILE_SERVICE_PORT"
    ),
    "review_service": ServiceInfo(
        "Review Service", "evercare.services.review_service.app:app", "REVIEW_SERVICE_PORT"
    ),
}

VALID_MODES = (*SERVICES, "all")

# Глобальный флаг для graceful shutdown
_shutdown_event: asyncio.Event | None = None
_running_tasks: list[asyncio.Task] = []


def setup_signal_handlers() -> None:
    """Настраивает обработчики сигналов для graceful shutdown."""
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    def signal_handler(sig: int) -> None:
        if _shutdown_event and not _shutdown_event.is_set():
            print(f"\nПолучен сигнал остановки (sig={sig}), завершаем работу...")
            _shutdown_event.set()
            for task in _running_tasks:
                if not task.done():
                    task.cancel()

    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
    except NotImplementedError:
        # Windows не поддерживает add_signal_handler
        signal.signal(signal.SIGINT, lambda s, f: signal_handler(s))
        signal.signal(signal.SIGTERM, lambda s, f: signal_handler(s))


async def run_service(name: str) -> None:
    """Запускает один микросервис в текущем event loop через uvicorn.Server."""
    import uvicorn

    info = SERVICES[name]
    await log_info(f"Запуск {info.title} на порту {info.port}...", type_msg=TypeMsg.INFO)

    config = uvicorn.Config(
        info.app_path,
        host="0.0.0.0",
        port=info.port,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info(f"{info.title}: graceful shutdown", type_msg=TypeMsg.DEBUG)
        await server.shutdown()


def resolve_mode(mode: str | None) -> str:
    """Режим из аргумента, иначе из COMPONENT_MODE."""
    if mode is None:
        mode = settings.system.COMPONENT_MODE
    mode = mode.strip().lower()
    if mode not in VALID_MODES:
        raise ValueError(f"Неизвестный режим: {mode}. Допустимые: {', '.join(VALID_MODES)}")
    return mode


async def main(mode: str | None = None) -> None:
    """
    Главная функция запуска.

    Args:
        mode: booking_service, jobposting_service, chat_service, profile_service,
              review_service или all.
              Если None, берётся из настроек (COMPONENT_MODE).
    """
    global _running_tasks

    setup_logging()
    setup_signal_handlers()

    mode = resolve_mode(mode)
    await log_info(
        f"Evercare v{settings.system.VERSION}: запуск в режиме '{mode}'",
        type_msg=TypeMsg.INFO,
    )

    names = list(SERVICES) if mode == "all" else [mode]
    _running_tasks = [asyncio.create_task(run_service(name), name=name) for name in names]

    try:
        await asyncio.gather(*_running_tasks)
    except asyncio.CancelledError:
        await log_info("Задача отменена, выполняется graceful shutdown", type_msg=TypeMsg.INFO)
    except Exception as e:
        await log_error(f"Критическая ошибка: {e}", exc_info=True)
        raise
    finally:
        for task in _running_tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*_running_tasks, return_exceptions=True)
        _running_tasks.clear()
        await log_info("Приложение остановлено", type_msg=TypeMsg.INFO)


def print_usage() -> None:
    """Выводит справку по использованию."""
    print(f"""
Evercare v{settings.system.VERSION}: микросервисы маркетплейса ухода

Использование:
    python main.py [mode]

Микросервисы:
    booking_service        Booking Service (:{settings.deployment.BOOKING_SERVICE_PORT})
    jobposting_service     Job Posting Service (:{settings.deployment.JOBPOSTING_SERVICE_PORT})
    chat_service           Chat Service + WebSocket (:{settings.deployment.CHAT_SERVICE_PORT})
    profile_service        Profile Service (:{settings.deployment.PROFILE_SERVICE_PORT})
    review_service         Review Service (:{settings.deployment.REVIEW_SERVICE_PORT})

Комплексный запуск:
    all                    Все сервисы в одном процессе

Без аргумента режим берётся из COMPONENT_MODE.
    """)


if __name__ == "__main__":
    mode = None

    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        elif arg in VALID_MODES:
            mode = arg
        else:
            print(f"Неизвестный режим: {arg}")
            print_usage()
            sys.exit(1)

    try:
        asyncio.run(main(mode))
    except KeyboardInterrupt:
        pass
