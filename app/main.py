from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.logging_config import configure_logging
from app.database.db import Base, engine
from app.models import metrics  # noqa: F401
from app.routes import events as event_routes

configure_logging()

app = FastAPI()

# Configure CORS
origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create all tables (in production the schema and add_event are managed by migrations)
Base.metadata.create_all(bind=engine)

app.include_router(event_routes.router)
