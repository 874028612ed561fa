"""Consistency API routes.

Previews the impact of template edits before they are saved and exposes
the system-wide integrity check. All routes are read-only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from template_guard.api.cache import IntegrityScanCache
from template_guard.api.deps import get_consistency_service, get_scan_cache
from template_guard.api.schemas import (
    PlaceholderValidationRequest,
    PlaceholderValidationResponse,
    TemplateChangeRequest,
    UrlTemplateChangeRequest,
)
from template_guard.interfaces.repository import MalformedContentDataError, NotFoundError
from template_guard.strategies.consistency import (
    ConsistencyService,
    ImpactReport,
    IntegrityStatus,
    RecordIntegrityResult,
)
from template_guard.strategies.placeholders import (
    build_preview_data,
    extract_placeholders,
    format_validation_errors,
    validate_template_placeholders,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["consistency"])


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _malformed(e: MalformedContentDataError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/templates/{template_id}/analyze-changes",
    response_model=ImpactReport,
    status_code=status.HTTP_200_OK,
)
async def analyze_template_changes(
    template_id: int,
    request: TemplateChangeRequest,
    service: ConsistencyService = Depends(get_consistency_service),
) -> ImpactReport:
    """Preview which content records a content-template edit affects.

    Args:
        template_id: Saved template being edited.
        request: Candidate body and optional new name.
        service: Consistency service.

    Returns:
        ImpactReport with placeholder diff, affected records and severity.

    Raises:
        HTTPException: 404 if the template does not exist, 422 if a bound
            record's stored data is corrupt.
    """
    try:
        logger.info(f"Analyzing changes for template {template_id}")
        return await service.preview_template_change(template_id, request.new_body, request.new_name)

    except NotFoundError as e:
        raise _not_found(e) from e
    except MalformedContentDataError as e:
        raise _malformed(e) from e
    except Exception as e:
        logger.error(f"Template change analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Template change analysis failed: {str(e)}",
        ) from e


@router.post(
    "/url-templates/{template_id}/analyze-changes",
    response_model=ImpactReport,
    status_code=status.HTTP_200_OK,
)
async def analyze_url_template_changes(
    template_id: int,
    request: UrlTemplateChangeRequest,
    service: ConsistencyService = Depends(get_consistency_service),
) -> ImpactReport:
    """Preview which content records a URL-template edit affects.

    Raises:
        HTTPException: 404 if the URL template does not exist, 422 if a
            bound record's stored data is corrupt.
    """
    try:
        logger.info(f"Analyzing changes for URL template {template_id}")
        return await service.preview_url_template_change(
            template_id, request.new_pattern, request.new_name
        )

    except NotFoundError as e:
        raise _not_found(e) from e
    except MalformedContentDataError as e:
        raise _malformed(e) from e
    except Exception as e:
        logger.error(f"URL template change analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"URL template change analysis failed: {str(e)}",
        ) from e


@router.get(
    "/integrity-check",
    response_model=IntegrityStatus | RecordIntegrityResult,
    status_code=status.HTTP_200_OK,
)
async def integrity_check(
    content_id: int | None = Query(default=None, description="Check a single content record"),
    refresh: bool = Query(default=False, description="Bypass the cached system scan"),
    service: ConsistencyService = Depends(get_consistency_service),
    cache: IntegrityScanCache = Depends(get_scan_cache),
) -> IntegrityStatus | RecordIntegrityResult:
    """Run the system-wide integrity scan, or validate one record.

    The system scan is served from a short-lived cache unless ``refresh``
    is set.

    Raises:
        HTTPException: 404 if the content record or its template does not
            exist, 422 if its stored data is corrupt.
    """
    try:
        if content_id is not None:
            return await service.validate_record_integrity(content_id)

        if not refresh:
            cached = cache.get()
            if cached is not None:
                logger.debug("Serving cached integrity scan")
                return cached

        result = await service.run_system_integrity_scan()
        cache.set(result)
        return result

    except NotFoundError as e:
        raise _not_found(e) from e
    except MalformedContentDataError as e:
        raise _malformed(e) from e
    except Exception as e:
        logger.error(f"Integrity check failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Integrity check failed: {str(e)}",
        ) from e


@router.post(
    "/placeholders/validate",
    response_model=PlaceholderValidationResponse,
    status_code=status.HTTP_200_OK,
)
async def validate_placeholders(request: PlaceholderValidationRequest) -> PlaceholderValidationResponse:
    """Check placeholder names of a template before it is saved.

    Violations are reported, not enforced; the editor decides whether to
    block the save.
    """
    placeholders = extract_placeholders(request.text)
    errors = validate_template_placeholders(request.text)

    return PlaceholderValidationResponse(
        is_valid=not errors,
        placeholders=placeholders,
        errors=errors,
        message=format_validation_errors(errors) if errors else None,
        sample_values=build_preview_data(placeholders),
    )
