import json
from typing import Annotated
from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from reset_api.database.database import get_session
from reset_api.exceptions import MalformedRequestError
from reset_api.models.password_reset import (
    ErrorResponse,
    ResetTokenValidationRequest,
    ResetTokenValidationResponse,
)
from reset_api.services import password_reset as password_reset_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


async def parse_validation_request(request: Request) -> ResetTokenValidationRequest:
    """
    Read the JSON body of a token validation request.

    The body is parsed by hand instead of through a FastAPI body parameter so that
    an unparsable payload produces the API's own 500 response instead of a 422.

    A JSON value other than an object carries no fields, so it is read as a
    request without `token` and `email`.

    Raises:
        MalformedRequestError: If the body is not JSON or is JSON `null`.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRequestError(str(e)) from e
    if payload is None:
        raise MalformedRequestError("Request body must not be null")
    if not isinstance(payload, dict):
        payload = {}
    return ResetTokenValidationRequest.model_validate(payload)


@router.post(
    "/validate-reset-token",
    response_model=ResetTokenValidationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": ResetTokenValidationRequest.model_json_schema()
                }
            },
            "required": True,
        }
    },
)
async def validate_reset_token(
    request_data: Annotated[
        ResetTokenValidationRequest, Depends(parse_validation_request)
    ],
    session: Annotated[Session, Depends(get_session)],
):
    """
    Check that a password reset token is live for the given email.
    Expects JSON: {"token": "...", "email": "..."}
    """
    password_reset_service.validate_reset_token(
        session, request_data.token, request_data.email
    )
    return ResetTokenValidationResponse()
