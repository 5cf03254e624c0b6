"""
License lookup routes for the trial license provider.
"""

import logging
import re
from datetime import datetime
from typing import List, NoReturn

from fastapi import APIRouter

from api_models import LicenseModel, APIErrorResponse
from errors import ErrorCode, NOT_FOUND_CODES, raise_api_error
from license import CatalogRefreshError, LicenseNotFoundError, ParseError
from resolver import ByCount, ByDate, LicenseCriterion, LicenseResolver
from services import ProviderNotConfiguredError, get_resolver

logger = logging.getLogger(__name__)

licenses_router = APIRouter(tags=["Licenses"])

_DATE_SEGMENT = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_COUNT_SEGMENT = re.compile(r"^\+?\d+$")

_ERROR_RESPONSES = {
    400: {"model": APIErrorResponse},
    404: {"model": APIErrorResponse},
    502: {"model": APIErrorResponse},
    503: {"model": APIErrorResponse},
}


def parse_expiration(value: str) -> LicenseCriterion:
    """Classify a URL segment as a date or a remaining-days count.

    Strict YYYY-MM-DD dates win over numbers; anything else is rejected
    with a 400 error.
    """
    text = (value or "").strip()
    if _DATE_SEGMENT.match(text):
        try:
            return ByDate(datetime.strptime(text, "%Y-%m-%d").date())
        except ValueError:
            logger.debug("Expiration %r looks like a date but is not a calendar day", text)
    elif _COUNT_SEGMENT.match(text):
        return ByCount(int(text))

    raise_api_error(
        ErrorCode.INVALID_EXPIRATION,
        details={"expiration": value}
    )


def _provider() -> LicenseResolver:
    try:
        return get_resolver()
    except ProviderNotConfiguredError as e:
        logger.error("License provider unavailable: %s", e)
        raise_api_error(ErrorCode.SERVICE_NOT_CONFIGURED)


def _raise_provider_error(e: Exception) -> NoReturn:
    """Map a provider failure to a structured API error."""
    if isinstance(e, LicenseNotFoundError):
        details = {"reason": e.reason.value}
        if e.date is not None:
            details["date"] = e.date.isoformat()
        if e.count is not None:
            details["count"] = e.count
        raise_api_error(NOT_FOUND_CODES[e.reason], message=str(e), details=details)
    if isinstance(e, CatalogRefreshError):
        details = {}
        if e.cause is not None and e.cause.status_code is not None:
            details["status_code"] = e.cause.status_code
        raise_api_error(ErrorCode.LICENSE_SOURCE_UNAVAILABLE, message=str(e), details=details or None)
    if isinstance(e, ParseError):
        raise_api_error(ErrorCode.LICENSE_SOURCE_MALFORMED, message=str(e))
    raise e


@licenses_router.get("/api/licenses", response_model=List[LicenseModel], responses=_ERROR_RESPONSES)
async def list_licenses():
    """All valid licenses, newest first."""
    logger.info("Request from route /api/licenses")
    provider = _provider()
    try:
        licenses = await provider.get_licenses()
    except (CatalogRefreshError, ParseError) as e:
        logger.error(f"Provider returned an error on get_licenses(): {e}")
        _raise_provider_error(e)

    logger.debug("Responding with %d licenses", len(licenses))
    return [LicenseModel.from_license(lic) for lic in licenses]


@licenses_router.get("/api/licenses/latest", response_model=LicenseModel, responses=_ERROR_RESPONSES)
async def latest_license():
    """The latest valid license."""
    logger.info("Request from route /api/licenses/latest")
    provider = _provider()
    try:
        lic = await provider.get_latest_license()
    except LicenseNotFoundError as e:
        logger.info(f"Provider found no license on get_latest_license(): {e}")
        _raise_provider_error(e)
    except (CatalogRefreshError, ParseError) as e:
        logger.error(f"Provider returned an error on get_latest_license(): {e}")
        _raise_provider_error(e)

    logger.debug("Latest license: %s", lic.key)
    return LicenseModel.from_license(lic)


@licenses_router.get("/api/licenses/{expiration}", response_model=LicenseModel, responses=_ERROR_RESPONSES)
async def license_by_expiration(expiration: str):
    """The license expiring on a date (YYYY-MM-DD) or in a number of days."""
    logger.info("Request from route /api/licenses/{expiration}")
    criterion = parse_expiration(expiration)
    logger.debug("Expiration parameter %r identified as %r", expiration, criterion)

    provider = _provider()
    try:
        lic = await provider.get_license(criterion)
    except LicenseNotFoundError as e:
        logger.info(f"Provider found no license on get_license({criterion!r}): {e}")
        _raise_provider_error(e)
    except (CatalogRefreshError, ParseError) as e:
        logger.error(f"Provider returned an error on get_license({criterion!r}): {e}")
        _raise_provider_error(e)

    return LicenseModel.from_license(lic)
