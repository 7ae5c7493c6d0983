from __future__ import annotations

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notekeeper.api import auth, categories, notes, reminders
from notekeeper.api import users as users_api
from notekeeper.errors import (
    AlreadyExists,
    ApplicationError,
    ConfigurationError,
    NotFound,
    StorageError,
    Unauthorized,
)
from notekeeper.services.auth_service import AuthenticationService
from notekeeper.services.note_service import NoteAggregateManager
from notekeeper.services.records_service import CategoryService, ReminderService
from notekeeper.services.user_service import UserService
from notekeeper.storage.categories_store import CategoriesStore
from notekeeper.storage.locks_store import KeyedLocks
from notekeeper.storage.notes_store import NotesStore
from notekeeper.storage.record_store import open_store
from notekeeper.storage.reminders_store import RemindersStore
from notekeeper.storage.users_store import UsersStore
from notekeeper.utils.auth_hash import PasswordHasher
from notekeeper.utils.config import Settings, load_settings
from notekeeper.utils.jwt_auth import TokenIssuer
from notekeeper.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# checked in order, so subclasses map through their base
ERROR_STATUS: list[tuple[type[ApplicationError], int]] = [
    (NotFound, 404),
    (AlreadyExists, 409),
    (Unauthorized, 401),
    (StorageError, 503),
    (ConfigurationError, 500),
]


def _status_for(exc: ApplicationError) -> int:
    for exc_type, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return code
    return 500


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = _status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_failed",
        code=exc.code,
        status=status_code,
        path=request.url.path,
        method=request.method,
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_format)

    def store(collection: str):
        return open_store(settings.store_backend, settings.data_dir, collection)

    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    issuer = TokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_exp_minutes),
    )

    app = FastAPI(title="Notekeeper API")
    app.state.settings = settings
    app.state.token_issuer = issuer
    users = UsersStore(store("users"))
    app.state.auth_service = AuthenticationService(users, hasher, issuer)
    app.state.note_manager = NoteAggregateManager(
        NotesStore(store("notes")),
        KeyedLocks(default_timeout=settings.lock_timeout_seconds),
    )
    app.state.user_service = UserService(users, hasher, app.state.note_manager)
    app.state.category_service = CategoryService(CategoriesStore(store("categories")))
    app.state.reminder_service = ReminderService(RemindersStore(store("reminders")))

    app.add_exception_handler(ApplicationError, application_error_handler)

    for router in (auth.router, users_api.router, notes.router, categories.router, reminders.router):
        app.include_router(router, prefix="/api/v1")

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info("app_created", store=settings.store_backend, data_dir=str(settings.data_dir))
    return app


app = create_app()
