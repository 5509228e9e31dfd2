# backend/main.py
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from config import settings
from database import init_db
from utils.errors import register_exception_handlers

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("storefront")

# Import routerów
from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.cart import router as cart_router
from routes.logs import router as logs_router

# Inicjalizacja
init_db()

app = FastAPI(title="Wholesale Storefront API", version="1.0.0")

# CORS: any origin may call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    start = time.perf_counter()
    logger.info("[%s] %s %s started", request_id, request.method, request.url.path)
    response = await call_next(request)
    duration = (time.perf_counter() - start) * 1000
    logger.info(
        "[%s] %s %s %s completed in %.0fms",
        request_id, request.method, request.url.path, response.status_code, duration,
    )
    return response


# Rejestracja routerów
app.include_router(auth_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(categories_router, prefix="/api")
app.include_router(cart_router, prefix="/api")
app.include_router(logs_router, prefix="/api")

@app.get("/")
def read_root():
    return {"message": "Wholesale Storefront API is running"}
