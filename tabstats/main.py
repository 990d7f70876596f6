import logging
from fastapi import FastAPI
from tabstats.api.endpoints import router as endpoints_router
from tabstats.config import load_settings

settings = load_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title=settings.app_title)
app.include_router(endpoints_router)
