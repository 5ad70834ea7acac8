from fastapi import FastAPI
from tourhub.core.config import get_settings
from tourhub.core.logging import configure_logging
from tourhub.db.base import Base, engine
from tourhub.db import models  # noqa: F401  registers tables on Base.metadata
from tourhub.api.routes import host_dashboard as host_dashboard_router


app = FastAPI(title="Tourhub host console")

@app.on_event("startup")
def startup():
    configure_logging(get_settings().log_level)
    Base.metadata.create_all(bind=engine)

@app.get("/")
def root():
    return {"message": "Tourhub console API running"}


app.include_router(host_dashboard_router.router)
