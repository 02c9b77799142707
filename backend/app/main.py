import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import ClubError
from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.api.routes.auth import router as auth_router
from app.api.routes.me import router as me_router
from app.api.routes.admin_users import router as admin_users_router
from app.api.routes.teams import router as teams_router
from app.api.routes.players import router as players_router
from app.api.routes.events import router as events_router
from app.api.routes.matches import router as matches_router
from app.api.routes.stats import router as stats_router
from app.api.routes.dashboard import router as dashboard_router

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = logging.getLogger(__name__)

app = FastAPI(title="Basket Club Manager")
app.include_router(auth_router)
app.include_router(me_router)
app.include_router(admin_users_router)
app.include_router(teams_router)
app.include_router(players_router)
app.include_router(events_router)
app.include_router(matches_router)
app.include_router(stats_router)
app.include_router(dashboard_router)


@app.exception_handler(ClubError)
async def club_error_handler(request: Request, exc: ClubError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Database ready at %s", settings.DATABASE_URL)


@app.get("/health")
def health():
    return {"ok": True, "db": settings.DATABASE_URL}
