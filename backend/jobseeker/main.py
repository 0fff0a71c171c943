import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobseeker.config import settings
from jobseeker.database import init_db
from jobseeker.dependencies import get_platform
from jobseeker.routers import applications, jobs, preferences, profile, saved, session, storage
from jobseeker.services.document_store import DocumentStoreError
from jobseeker.utils.filesystem import ensure_data_dirs

logger = logging.getLogger("jobseeker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: prepare the local stores, then resolve the session before serving
    ensure_data_dirs()
    init_db()
    platform = get_platform()
    await platform.session.start()
    logger.info("Session observer started.")
    yield
    # Shutdown: drop in-flight fetches and clear the session
    platform.listings.cancel()
    platform.session.stop()


app = FastAPI(
    title="JobSeeker",
    description="Job board backend: session bootstrap, listings, applications and bookmarks",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:8081",
        "http://localhost:8081",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DocumentStoreError)
async def document_store_error(request: Request, exc: DocumentStoreError):
    logger.error("Document store error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Something went wrong. Please try again."})


app.include_router(session.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(saved.router, prefix=settings.api_prefix)
app.include_router(profile.router, prefix=settings.api_prefix)
app.include_router(preferences.router, prefix=settings.api_prefix)
app.include_router(storage.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "1.0.0"}
