# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, File, Form, Query, Request, Response, UploadFile, Depends
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .database import ProductStore
from .errors import StorageError
from .models import Product
from .service import InventoryService
from .uploads import PhotoStorage

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["POST", "GET", "PATCH", "DELETE"]


def get_service(request: Request) -> InventoryService:
    return request.app.state.service


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    store = ProductStore(settings.data_file)
    photos = PhotoStorage(settings.upload_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.initialise()
        photos.initialise()
        logger.info("serving %s, photos in %s", settings.data_file, settings.upload_dir)
        yield

    app = FastAPI(title="api-inventory", lifespan=lifespan)
    app.state.settings = settings
    app.state.service = InventoryService(store, photos)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )

    # ---------------------------
    # Error mapping
    # ---------------------------
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405 and request.url.path == "/api" and request.method not in ALLOWED_METHODS:
            return JSONResponse(
                status_code=405,
                content={"detail": f"Method {request.method} Not Allowed"},
                headers={"Allow": ", ".join(ALLOWED_METHODS)},
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def invalid_input_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
            for e in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"detail": "Invalid input", "errors": errors})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "storage failure"})

    # ---------------------------
    # Product endpoint
    # ---------------------------
    @app.get("/api", response_model=List[Product])
    async def list_products(
        name: Optional[str] = None,
        service: InventoryService = Depends(get_service),
    ):
        return await service.list_products(name)

    @app.post("/api", status_code=201, response_model=Product)
    async def create_product(
        name: str = Form(...),
        category: str = Form(...),
        amount: int = Form(...),
        photo: Optional[UploadFile] = File(None),
        service: InventoryService = Depends(get_service),
    ):
        data = None
        filename = None
        if photo is not None and photo.filename:
            data = await photo.read()
            filename = photo.filename
        return await service.create_product(name, category, amount, data, filename)

    @app.patch("/api", response_model=Product)
    async def update_amount(
        id: str = Query(...),
        amount: int = Query(...),
        service: InventoryService = Depends(get_service),
    ):
        return await service.update_amount(id, amount)

    @app.delete("/api", status_code=204, response_class=Response)
    async def delete_product(
        id: str = Query(...),
        service: InventoryService = Depends(get_service),
    ):
        await service.delete_product(id)
        return Response(status_code=204)

    # Photos are served as {photo_url_prefix}/{Product.photo}
    app.mount(
        settings.photo_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app
