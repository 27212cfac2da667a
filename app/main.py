import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.routers import chat, dashboard, health, operations, topology
from app.domain.errors import NotFoundError, ValidationError, ConflictError
from app.application.event_handlers import register_event_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Whale-Kube Dashboard API",
    description="Runs cluster deployment operations and serves the system map",
    version=settings.VERSION,
)

# Register domain event handlers on startup
@app.on_event("startup")
async def startup_event():
    register_event_handlers()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(operations.router, tags=["Operations"])
app.include_router(dashboard.router, tags=["Dashboard"])
app.include_router(topology.router, tags=["Topology"])
app.include_router(chat.router, tags=["Chat"])

@app.get("/")
async def root():
    return {"message": "Welcome to the Whale-Kube Dashboard API. See /docs for API documentation"}
