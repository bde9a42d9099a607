import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers.admin import router as admin_router
from routers.health import router as health_router
from routers.progress import router as progress_router
from routers.tests import router as tests_router
from routers.topics import router as topics_router

logger = logging.getLogger("learning-tracker")
logging.basicConfig(level=logging.INFO)

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]

app = FastAPI(title="Learning Tracker – Quiz API")

# Allow calls from the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token", "x-user-id"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(topics_router)  # /topics/...
app.include_router(tests_router)  # /tests/generate, /tests/skip, /tests/{id}/...
app.include_router(progress_router)  # /progress
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
