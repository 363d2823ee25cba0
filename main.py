import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import APIRouter, Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

import auth
import crud
from auth import Identity, auth_dependency, require_admin
from database import BaseStore, CollectionStore, DATA_DIR
from errors import AppError, UploadError
from schemas import (
    LoginRequest,
    CategoryCreate,
    ProductCreate, ProductUpdate,
    BannerCreate, BannerUpdate,
    TestimonialCreate, TestimonialUpdate,
    FAQCreate, FAQUpdate,
    InquiryCreate, InquiryUpdate,
    Settings,
)
from seed import initialize_data

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_SIZE = 10 * 1024 * 1024
CHUNK_SIZE = 1024 * 1024


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.store
    created = initialize_data(store)
    if created:
        logger.info("Initialized default data: %s", ", ".join(created))
    logger.info("Data stored in %s", getattr(store, "data_dir", "memory"))
    yield


app = FastAPI(title="GauShala Fresh API", lifespan=lifespan)
app.state.store = CollectionStore(DATA_DIR)
app.state.upload_dir = UPLOAD_DIR

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="uploads")


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# -------------------- Helpers --------------------

def get_store(request: Request) -> BaseStore:
    return request.app.state.store


def get_upload_dir(request: Request) -> str:
    return request.app.state.upload_dir


api = APIRouter(prefix="/api")
admin = APIRouter(prefix="/api/admin", dependencies=[Depends(require_admin)])


# -------------------- Health --------------------

@app.get("/")
def read_root():
    return {"message": "GauShala Fresh API is running"}


@api.get("/health")
def health(store: BaseStore = Depends(get_store)):
    return {
        "backend": "running",
        "data_dir": getattr(store, "data_dir", None),
        "collections": store.names(),
    }


# -------------------- Auth --------------------

@api.post("/auth/login", response_model=dict)
def login(payload: LoginRequest, store: BaseStore = Depends(get_store)):
    return auth.login(store, payload.email, payload.password)


@api.get("/auth/me", response_model=dict)
def me(identity: Identity = Depends(auth_dependency), store: BaseStore = Depends(get_store)):
    return auth.me(store, identity)


# -------------------- Public content --------------------

@api.get("/products", response_model=List[dict])
def public_products(store: BaseStore = Depends(get_store)):
    return crud.products.list_public(store)


@api.get("/products/{slug}", response_model=dict)
def public_product(slug: str, store: BaseStore = Depends(get_store)):
    return crud.products.get_public_by_slug(store, slug)


@api.get("/categories", response_model=List[dict])
def public_categories(store: BaseStore = Depends(get_store)):
    return crud.categories.list_public(store)


@api.get("/banners", response_model=List[dict])
def public_banners(page: Optional[str] = Query(None), store: BaseStore = Depends(get_store)):
    return crud.banners.list_public(store, page=page)


@api.get("/testimonials", response_model=List[dict])
def public_testimonials(store: BaseStore = Depends(get_store)):
    return crud.testimonials.list_public(store)


@api.get("/faqs", response_model=List[dict])
def public_faqs(store: BaseStore = Depends(get_store)):
    return crud.faqs.list_public(store)


@api.get("/settings", response_model=dict)
def public_settings(store: BaseStore = Depends(get_store)):
    return crud.get_settings(store)


@api.post("/inquiries", response_model=dict, status_code=201)
def submit_inquiry(payload: InquiryCreate, store: BaseStore = Depends(get_store)):
    return crud.submit_inquiry(store, payload.to_record())


# -------------------- Dashboard --------------------

@admin.get("/stats", response_model=dict)
def dashboard_stats(store: BaseStore = Depends(get_store)):
    return crud.stats(store)


# -------------------- Products --------------------

@admin.get("/products", response_model=List[dict])
def list_products(store: BaseStore = Depends(get_store)):
    return crud.products.list_admin(store)


@admin.get("/products/{product_id}", response_model=dict)
def get_product(product_id: str, store: BaseStore = Depends(get_store)):
    return crud.products.get(store, product_id)


@admin.post("/products", response_model=dict, status_code=201)
def create_product(payload: ProductCreate, store: BaseStore = Depends(get_store)):
    return crud.products.create(store, payload.to_record())


@admin.put("/products/{product_id}", response_model=dict)
def update_product(product_id: str, payload: ProductUpdate, store: BaseStore = Depends(get_store)):
    return crud.products.update(store, product_id, payload.to_patch())


@admin.delete("/products/{product_id}", response_model=dict)
def delete_product(product_id: str, store: BaseStore = Depends(get_store)):
    crud.products.delete(store, product_id)
    return {"success": True}


# -------------------- Categories --------------------

@admin.get("/categories", response_model=List[dict])
def list_categories(store: BaseStore = Depends(get_store)):
    return crud.categories.list_admin(store)


@admin.post("/categories", response_model=dict, status_code=201)
def create_category(payload: CategoryCreate, store: BaseStore = Depends(get_store)):
    return crud.categories.create(store, payload.to_record())


# -------------------- Banners --------------------

@admin.get("/banners", response_model=List[dict])
def list_banners(store: BaseStore = Depends(get_store)):
    return crud.banners.list_admin(store)


@admin.post("/banners", response_model=dict, status_code=201)
def create_banner(payload: BannerCreate, store: BaseStore = Depends(get_store)):
    return crud.banners.create(store, payload.to_record())


@admin.put("/banners/{banner_id}", response_model=dict)
def update_banner(banner_id: str, payload: BannerUpdate, store: BaseStore = Depends(get_store)):
    return crud.banners.update(store, banner_id, payload.to_patch())


@admin.delete("/banners/{banner_id}", response_model=dict)
def delete_banner(banner_id: str, store: BaseStore = Depends(get_store)):
    crud.banners.delete(store, banner_id)
    return {"success": True}


# -------------------- Testimonials --------------------

@admin.get("/testimonials", response_model=List[dict])
def list_testimonials(store: BaseStore = Depends(get_store)):
    return crud.testimonials.list_admin(store)


@admin.post("/testimonials", response_model=dict, status_code=201)
def create_testimonial(payload: TestimonialCreate, store: BaseStore = Depends(get_store)):
    return crud.testimonials.create(store, payload.to_record())


@admin.put("/testimonials/{testimonial_id}", response_model=dict)
def update_testimonial(testimonial_id: str, payload: TestimonialUpdate, store: BaseStore = Depends(get_store)):
    return crud.testimonials.update(store, testimonial_id, payload.to_patch())


@admin.delete("/testimonials/{testimonial_id}", response_model=dict)
def delete_testimonial(testimonial_id: str, store: BaseStore = Depends(get_store)):
    crud.testimonials.delete(store, testimonial_id)
    return {"success": True}


# -------------------- FAQs --------------------

@admin.get("/faqs", response_model=List[dict])
def list_faqs(store: BaseStore = Depends(get_store)):
    return crud.faqs.list_admin(store)


@admin.post("/faqs", response_model=dict, status_code=201)
def create_faq(payload: FAQCreate, store: BaseStore = Depends(get_store)):
    return crud.faqs.create(store, payload.to_record())


@admin.put("/faqs/{faq_id}", response_model=dict)
def update_faq(faq_id: str, payload: FAQUpdate, store: BaseStore = Depends(get_store)):
    return crud.faqs.update(store, faq_id, payload.to_patch())


@admin.delete("/faqs/{faq_id}", response_model=dict)
def delete_faq(faq_id: str, store: BaseStore = Depends(get_store)):
    crud.faqs.delete(store, faq_id)
    return {"success": True}


# -------------------- Inquiries --------------------

@admin.get("/inquiries", response_model=List[dict])
def list_inquiries(store: BaseStore = Depends(get_store)):
    return crud.inquiries.list_admin(store)


@admin.put("/inquiries/{inquiry_id}", response_model=dict)
def update_inquiry(inquiry_id: str, payload: InquiryUpdate, store: BaseStore = Depends(get_store)):
    return crud.inquiries.update(store, inquiry_id, payload.to_patch())


@admin.delete("/inquiries/{inquiry_id}", response_model=dict)
def delete_inquiry(inquiry_id: str, store: BaseStore = Depends(get_store)):
    crud.inquiries.delete(store, inquiry_id)
    return {"success": True}


# -------------------- Settings --------------------

@admin.get("/settings", response_model=dict)
def get_settings(store: BaseStore = Depends(get_store)):
    return crud.get_settings(store)


@admin.put("/settings", response_model=dict)
def update_settings(payload: Settings, store: BaseStore = Depends(get_store)):
    return crud.replace_settings(store, payload.to_record())


# -------------------- Uploads --------------------

@admin.post("/upload", response_model=dict)
def upload_file(file: Optional[UploadFile] = File(None), upload_dir: str = Depends(get_upload_dir)):
    if file is None or not file.filename:
        raise UploadError("No file uploaded")
    if not (file.content_type or "").startswith("image/"):
        logger.warning("Rejected upload %s with type %s", file.filename, file.content_type)
        raise UploadError("Only image files are allowed")

    content = b""
    while True:
        chunk = file.file.read(CHUNK_SIZE)
        if not chunk:
            break
        content += chunk
        if len(content) > MAX_UPLOAD_SIZE:
            logger.warning("Rejected upload %s over %d bytes", file.filename, MAX_UPLOAD_SIZE)
            raise UploadError("File too large (max 10MB)")

    ext = os.path.splitext(file.filename)[1]
    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"
    os.makedirs(upload_dir, exist_ok=True)
    with open(os.path.join(upload_dir, filename), "wb") as f:
        f.write(content)
    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return {"url": f"/uploads/{filename}", "filename": filename}


app.include_router(api)
app.include_router(admin)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
