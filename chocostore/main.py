import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chocostore.config import settings
from chocostore.database import create_db_and_tables
from chocostore.exceptions import (
    OrderItemsWriteError,
    OrderSubmissionError,
    OrderValidationError,
    RemoteFetchError,
    StorageError,
    UploadValidationError,
)
from chocostore.routes import (
    admin_dashboard,
    admin_orders,
    auth,
    catalog_public,
    categories_admin,
    gallery_admin,
    health,
    order_print,
    products_admin,
    reviews,
    reviews_admin,
    states_admin,
    wizard,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="ChocoStore Order API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------- ERROR HANDLERS --------

def _error(status_code: int, exc, title: str, description: str, **extra):
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "code": exc.code,
            "notice": {"title": title, "description": description, "variant": "destructive"},
            **extra,
        },
    )


@app.exception_handler(RemoteFetchError)
async def remote_fetch_error_handler(request: Request, exc: RemoteFetchError):
    logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.reason})")
    return _error(503, exc, "Error", exc.message)


@app.exception_handler(OrderValidationError)
async def order_validation_error_handler(request: Request, exc: OrderValidationError):
    return _error(422, exc, exc.title, exc.message)


@app.exception_handler(OrderSubmissionError)
async def order_submission_error_handler(request: Request, exc: OrderSubmissionError):
    extra = {}
    if isinstance(exc, OrderItemsWriteError):
        extra["order_id"] = exc.order_id
    logger.error(f"{request.method} {request.url.path}: {exc.code}")
    return _error(502, exc, "Order Failed", exc.message, **extra)


@app.exception_handler(UploadValidationError)
async def upload_validation_error_handler(request: Request, exc: UploadValidationError):
    return _error(400, exc, "Upload Failed", exc.message, field=exc.field)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return _error(502, exc, "Upload Failed", "Could not store the file. Please try again.")


# -------- ROUTERS --------

app.include_router(catalog_public.router, prefix="/catalog", tags=["Catalog"])
app.include_router(catalog_public.gallery_router, prefix="/gallery", tags=["Gallery"])
app.include_router(wizard.router, prefix="/customize", tags=["Order Wizard"])
app.include_router(order_print.router, tags=["Order Confirmation"])
app.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(categories_admin.router, prefix="/admin/categories", tags=["Admin Categories"])
app.include_router(products_admin.router, prefix="/admin/products", tags=["Admin Products"])
app.include_router(states_admin.router, prefix="/admin/states", tags=["Admin States"])
app.include_router(gallery_admin.router, prefix="/admin/gallery", tags=["Admin Gallery"])
app.include_router(reviews_admin.router, prefix="/admin/reviews", tags=["Admin Reviews"])
app.include_router(admin_orders.router, prefix="/admin/orders", tags=["Admin Orders"])
app.include_router(admin_dashboard.router, prefix="/admin/dashboard", tags=["Admin Dashboard"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "customize_endpoints": [
            "/customize/", "/customize/customer", "/customize/advance", "/customize/back",
            "/customize/select-category", "/customize/select-product", "/customize/select-size",
            "/customize/quantity", "/customize/cart/add", "/customize/cart/update",
            "/customize/cart/remove", "/customize/summary", "/customize/image", "/customize/submit",
        ],
        "catalog_endpoints": [
            "/catalog/categories", "/catalog/categories/{category_id}/products",
            "/catalog/products", "/catalog/products/{product_id}/sizes", "/catalog/states",
        ],
        "confirmation_endpoints": [
            "/print/{order_id}", "/print/{order_id}/pdf", "/OrderConfirmation",
        ],
        "public_endpoints": ["/gallery", "/reviews"],
        "auth_endpoints": ["/auth/register", "/auth/login", "/auth/logout", "/auth/me"],
        "admin_endpoints": [
            "/admin/categories", "/admin/products", "/admin/states", "/admin/gallery",
            "/admin/reviews", "/admin/orders", "/admin/orders/export", "/admin/dashboard",
        ],
    }
