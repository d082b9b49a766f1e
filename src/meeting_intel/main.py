from fastapi import FastAPI
from fastapi.responses import JSONResponse
import logging

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .config import get_config
from .api.v1 import router as api_v1_router
from .services.scheduler import init_scheduler, shutdown_scheduler

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Meeting Intelligence - Action Items & Notifications")

app.include_router(api_v1_router)


@app.on_event("startup")
def startup():
    """Start the background scheduler in the designated process."""
    init_scheduler()


@app.on_event("shutdown")
def shutdown():
    shutdown_scheduler()


@app.get("/health")
async def health():
    return JSONResponse({"status": "ok", "environment": config.environment})
