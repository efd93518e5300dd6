import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routers.admin import router as admin_router

# Routers
from routers.answers import router as answers_router
from routers.board import router as board_router
from routers.grading import router as grading_router
from routers.health import router as health_router
from routers.sessions import router as sessions_router

logger = logging.getLogger("trivia-board")
logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Trivia Board – Grading API")

# Browser board served from a separate dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(grading_router)  # /grade, /grade-batch
app.include_router(board_router)  # /board
app.include_router(sessions_router)  # /sessions/...
app.include_router(answers_router)  # /answers/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
