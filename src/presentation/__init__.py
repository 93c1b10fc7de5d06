import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from .user_api import router as user_router
from .task_api import router as task_router
from .habit_api import router as habit_router
from .mood_api import router as mood_router
from .finance_api import router as finance_router
from .notification_api import router as notification_router
from .dashboard_api import router as dashboard_router
from Data.database import DuplicateIdError, init_db

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("planner")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create DB tables
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(title="+Cura Planner", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DuplicateIdError)
async def duplicate_id_handler(request: Request, exc: DuplicateIdError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


app.include_router(user_router, tags=["User"])
app.include_router(task_router, prefix="/tasks", tags=["Tasks"])
app.include_router(habit_router, prefix="/habits", tags=["Habits"])
app.include_router(mood_router, prefix="/mood", tags=["Mood"])
app.include_router(finance_router, prefix="/finance", tags=["Finance"])
app.include_router(notification_router, prefix="/notifications", tags=["Notifications"])
app.include_router(dashboard_router, tags=["Dashboard"])
