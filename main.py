import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.database import create_db_and_tables
from core.exceptions import register_exception_handlers
from routes.projects import router as project_router
from routes.project_content import router as project_content_router
from routes.team_members import router as team_members_router
from routes.categories import router as categories_router
from routes.public import router as public_router
from routes.articles import router as articles_router


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# =========================================
# 🏁 Lifespan (DB initialization)
# =========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("✅ Database tables created on startup (%s).", settings.ENVIRONMENT)
    yield
    logger.info("✅ Application shutting down.")


# =========================================
#  ✅ FastAPI App
# =========================================
app = FastAPI(lifespan=lifespan, title="Community CMS Backend", debug=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# =========================================
# 📦 Routers
# =========================================
app.include_router(project_router, prefix="/projects", tags=["Projects"])
app.include_router(project_content_router, prefix="/projects", tags=["Project Content"])
app.include_router(team_members_router, prefix="/team-members", tags=["Team Members"])
app.include_router(articles_router)
app.include_router(categories_router)
app.include_router(public_router)


# =========================================
# 🩺 Health Check
# =========================================
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "Backend is running"}


@app.get("/")
def read_root():
    return {"message": "Welcome to Community CMS Backend!"}
