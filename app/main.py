import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import config
from app.database import Base, engine
from app.errors import InternalError, ValidationError, describe_errors
from app.models import task as _task_model, user as _user_model  # noqa: F401  register tables
from app.routers import auth, tasks

logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Task List")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)


# Malformed or missing input is a 400, not FastAPI's default 422
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    err = ValidationError(describe_errors(exc.errors()))
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


def run():
    import uvicorn
    from app.logging_setup import setup_logging

    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    logger.info("starting server on %s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    run()
