# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from .accounts import AccountService
from .config import Settings, get_settings
from .database import connect, ensure_indexes, get_db, ping
from .errors import ServiceError
from .logging_setup import setup_logging
from .models import TaskCreate, TaskUpdate, UserCreate, UserLogin, UserUpdate
from .tasks import TaskService

logger = logging.getLogger(__name__)


def get_account_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_task_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> TaskService:
    return TaskService(db)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "message": "Invalid request",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Error handling %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal Server Error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = connect(settings)
        app.state.db = client[settings.mongodb_db]
        try:
            await ensure_indexes(app.state.db)
        except Exception:
            # The API still starts; requests will fail until MongoDB is reachable
            logger.exception("Could not create MongoDB indexes")
        try:
            yield
        finally:
            client.close()
            logger.info("MongoDB client closed")

    app = FastAPI(title=settings.project_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.post("/api/register")
    async def register_user(user: UserCreate, accounts: AccountService = Depends(get_account_service)):
        return await accounts.register(user.name, user.email, user.password)

    @app.post("/api/login")
    async def login(credentials: UserLogin, accounts: AccountService = Depends(get_account_service)):
        return await accounts.login(credentials.email, credentials.password)

    @app.post("/api/signout")
    async def signout(accounts: AccountService = Depends(get_account_service)):
        return await accounts.signout()

    @app.put("/api/user/{user_id}")
    async def update_profile(
        user_id: str,
        profile: UserUpdate,
        accounts: AccountService = Depends(get_account_service),
    ):
        return await accounts.update_profile(user_id, profile.name, profile.email)

    @app.post("/api/tasks")
    async def create_task(task: TaskCreate, tasks: TaskService = Depends(get_task_service)):
        return await tasks.create_task(task.userId, task.title, task.thingstodo, task.dueDate)

    @app.get("/api/tasks")
    async def get_tasks(userId: str = Query(...), tasks: TaskService = Depends(get_task_service)):
        return await tasks.list_tasks(userId)

    # Must stay ahead of the generic PUT /api/tasks/{task_id}
    @app.put("/api/tasks/{task_id}/completed")
    async def complete_task(task_id: str, tasks: TaskService = Depends(get_task_service)):
        return await tasks.complete_task(task_id)

    @app.put("/api/tasks/{task_id}")
    async def update_task(task_id: str, task_update: TaskUpdate, tasks: TaskService = Depends(get_task_service)):
        return await tasks.update_task(task_id, task_update)

    @app.delete("/api/tasks/{task_id}")
    async def delete_task(task_id: str, tasks: TaskService = Depends(get_task_service)):
        return await tasks.delete_task(task_id)

    @app.get("/api/health")
    async def health(db: AsyncIOMotorDatabase = Depends(get_db)):
        if await ping(db):
            return {"success": True, "database": "ok"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "database": "unavailable"},
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
