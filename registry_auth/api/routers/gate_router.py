from fastapi import APIRouter, Request, Response

from registry_auth.config.environment_variables import DEFAULT_AUTH_PATH
from registry_auth.domain.models.auth_models import AuthRequest
from registry_auth.domain.services.gate_service import DGate


def make_gate_router(
    path: str = DEFAULT_AUTH_PATH, methods: list[str] | None = None
) -> APIRouter:
    """Build the router exposing the gate at *path* for *methods*."""
    gate_router = APIRouter(tags=["authn"])

    async def authenticate(request: Request, gate: DGate) -> Response:
        # Only headers are consulted; the body and query string are never read.
        auth_request = AuthRequest(
            method=request.method,
            path=request.url.path,
            headers=request.headers,
        )
        auth_response = await gate.handle(auth_request)
        return Response(
            status_code=auth_response.status_code,
            headers=auth_response.headers,
        )

    gate_router.add_api_route(
        path,
        authenticate,
        methods=methods or ["GET"],
        summary="Check Basic credentials",
        response_class=Response,
        responses={
            200: {"description": "Credential accepted"},
            401: {"description": "Credential absent, malformed, or rejected"},
        },
    )
    return gate_router
