"""Hosted estimation endpoint: description in, priced quote out. No auth."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from jobquote.config import get_settings
from jobquote.models.schemas import GenerateQuoteRequest, GenerateQuoteResponse
from jobquote.services.catalog import DEFAULT_CATALOG
from jobquote.services.estimator import estimate_quote

logger = logging.getLogger("jobquote.estimate")

router = APIRouter(tags=["estimate"])


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


@router.post(
    "/generate-quote",
    response_model=GenerateQuoteResponse,
    responses={400: {"description": "Malformed request body"}},
)
async def generate_quote(request: Request):
    """Estimate a quote from a free-text job description.

    The body is parsed by hand so that malformed JSON and schema
    violations both come back as 400 {"error": "..."}.
    """
    try:
        body = await request.json()
    except ValueError:
        return _error("Request body must be valid JSON")

    try:
        data = GenerateQuoteRequest.model_validate(body)
    except ValidationError as e:
        return _error(_validation_message(e))

    settings = get_settings()
    catalog = getattr(request.app.state, "catalog", DEFAULT_CATALOG)
    result = estimate_quote(
        data.job_description,
        hourly_rate=data.hourly_rate,
        gst_enabled=data.gst_enabled,
        catalog=catalog,
        default_rate=settings.default_hourly_rate,
        tax_rate=settings.gst_rate,
    )
    logger.info(f"Estimated '{result.job_title}' for {data.client_email or 'anonymous'}: {result.total:.2f}")
    return result.to_response()
