from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.app_logger import setup_logging

# Ensure all SQLAlchemy models are imported so relationships resolve
import tracker.models  # noqa: F401

from tracker.api import (
    month_records,  # /month-records
    products,       # /products
    tasks,          # /tasks
    game_names,     # /game-names
    users,          # /users
    reports,        # /reports
)
from tracker.api.system import router as system_router  # /health, /version

setup_logging()

app = FastAPI(title="Product Tracker")

# --- CORS for local frontend dev ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000", "http://127.0.0.1:3000",
        "http://localhost:5173", "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(system_router)

app.include_router(month_records.router)
app.include_router(products.router)
app.include_router(tasks.router)
app.include_router(game_names.router)
app.include_router(users.router)
app.include_router(reports.router)
