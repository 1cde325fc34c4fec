# backend/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import init_db

# Routers
from routes.auth import router as auth_router
from routes.admin import router as admin_router
from routes.logs import router as logs_router
from routes.company import router as company_router
from routes.products import router as products_router
from routes.payment import router as payment_router
from routes.releases import router as releases_router
from routes.editorial import router as editorial_router
from routes.distribution import router as distribution_router
from routes.approvals import router as approvals_router
from routes.influencer import router as influencer_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialization
init_db()

app = FastAPI(title="Newsworthy API", version="1.0.0")

# CORS: the dashboard origin from settings, plus local development
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Full detail stays in the server log
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Router registration
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(logs_router)
app.include_router(company_router)
app.include_router(products_router)
app.include_router(payment_router)
app.include_router(releases_router)
app.include_router(editorial_router)
app.include_router(distribution_router)
app.include_router(approvals_router)
app.include_router(influencer_router)

@app.get("/")
def read_root():
    return {"message": "Newsworthy API is running"}
