from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
import os

load_dotenv()

from infrastructure.metrics.metrics import metrics_endpoint
from infrastructure.logging.structlog_logs import logger
from app.routers.v1 import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("DB_CREATE_TABLES", "").lower() == "true":
        from infrastructure.db.database import create_tables
        await create_tables()
        logger.info("database_tables_ensured", step="startup")
    yield


app = FastAPI(title="crediario-service", lifespan=lifespan)

@app.get("/metrics")
async def metrics():
    return metrics_endpoint()

@app.get("/health")
async def health():
    return {"status": "ok", "message": "crediario-service is running"}

app.include_router(router)
