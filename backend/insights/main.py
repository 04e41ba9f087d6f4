import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from insights.core.config import settings
from insights.api.routes.auth import router as auth_router
from insights.api.routes.posts import router as posts_router
from insights.api.routes.categories import router as categories_router
from insights.api.routes.resources import router as resources_router
from insights.api.routes.images import router as images_router
from insights.api.routes.analytics import router as analytics_router
from insights.api.routes.admin import router as admin_router
from insights.api.routes.audit import router as audit_router
from insights.services.errors import ServiceError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("insights")

app = FastAPI(title="AI Insights Blog")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    fields: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        fields.setdefault(".".join(loc) or "body", err.get("msg", "invalid"))
    return JSONResponse(status_code=400, content={"error": "validation_failed", "fields": fields})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "internal_error"})


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(categories_router)
app.include_router(resources_router)
app.include_router(images_router)
app.include_router(analytics_router)
app.include_router(admin_router)
app.include_router(audit_router)

app.mount(
    settings.uploads_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)
