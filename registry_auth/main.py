from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from registry_auth.api.health_interceptor import HealthCheckInterceptor
from registry_auth.api.request_logging_middleware import RequestLoggingMiddleware
from registry_auth.api.routers.gate_router import make_gate_router
from registry_auth.config import dependencies
from registry_auth.config.dependencies import GlobalDependencies
from registry_auth.config.environment_variables import EnvironmentVariables
from registry_auth.domain.exceptions import GenericException
from registry_auth.domain.services.gate_service import build_verifier
from registry_auth.utils.logging import make_logger

logger = make_logger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    await dependencies.startup_global_dependencies()
    # Fail at startup rather than on the first request when misconfigured.
    build_verifier(fastapi_app.state.environment_variables)
    yield
    await dependencies.async_shutdown()
    dependencies.shutdown()


def format_error_response(detail: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": detail, "code": status_code, "data": None},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logger.error(f"{request.method} {request.url.path}: {exc_str}")
    content = {"status_code": 10422, "message": exc_str, "data": None}
    return JSONResponse(
        content=content, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


async def handle_generic(request, exc):
    if exc.code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}")
    return format_error_response(exc.message, exc.code)


async def handle_http_exc(request, exc):
    return format_error_response(exc.detail, exc.status_code)


async def handle_unexpected(request, exc):
    logger.exception("Unhandled exception caught by exception handler", exc_info=exc)
    return format_error_response(
        f"Internal Server Error. Class: {exc.__class__}. Exception: {exc}", 500
    )


def create_fastapi_app(
    environment_variables: EnvironmentVariables | None = None,
) -> FastAPI:
    environment_variables = (
        environment_variables or GlobalDependencies().environment_variables
    )

    fastapi_app = FastAPI(
        title="Registry Authentication API",
        lifespan=lifespan,
    )
    fastapi_app.state.environment_variables = environment_variables
    fastapi_app.add_middleware(RequestLoggingMiddleware)

    fastapi_app.add_exception_handler(
        RequestValidationError, validation_exception_handler
    )
    fastapi_app.add_exception_handler(GenericException, handle_generic)
    fastapi_app.add_exception_handler(HTTPException, handle_http_exc)
    fastapi_app.add_exception_handler(Exception, handle_unexpected)

    fastapi_app.include_router(
        make_gate_router(
            environment_variables.AUTH_PATH, environment_variables.auth_methods
        )
    )
    logger.info(
        f"Gate route {','.join(environment_variables.auth_methods)} "
        f"{environment_variables.AUTH_PATH} "
        f"(verifier={environment_variables.VERIFIER_PROVIDER})"
    )
    return fastapi_app


fastapi_app = create_fastapi_app()

# Health checks are answered outside the middleware stack.
# Export as `app` so uvicorn entry points (registry_auth.main:app) work.
app = HealthCheckInterceptor(fastapi_app)
