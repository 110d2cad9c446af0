import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from catalog import router as catalog_router
from checkout import router as checkout_router
from core import db
from sales import router as sales_router
from users import router as users_router

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def cors_origins() -> list[str]:
    frontend = os.environ.get("FRONTEND_URL", "http://localhost:4000").strip().rstrip("/")
    return [frontend or "http://localhost:4000"]


app = FastAPI(lifespan=lifespan)

# The storefront and admin pages call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router.router, tags=["catalog"])
app.include_router(checkout_router.router, tags=["checkout"])
app.include_router(auth_router.router, tags=["auth"])
app.include_router(sales_router.router, tags=["sales"])
app.include_router(users_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "widget store api"}
