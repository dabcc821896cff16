import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_store
from storefront.core.errors import AuthorizationError, ConfigurationError, StorageUnavailable
from storefront.core.security import authenticate_admin, create_access_token, require_admin
from storefront.schemas.auth import AdminLoginRequest, TokenResponse
from storefront.schemas.business_rules import (
    BusinessRules,
    BusinessRulesOut,
    ForceCloseRequest,
    SpecialClosingRequest,
)
from storefront.services.settings import ConfigurationStore
from storefront.services.settings.admin import (
    update_rules,
    set_force_close,
    add_special_closing,
    remove_special_closing,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _write(action):
    """run a settings mutation, mapping its failures to HTTP errors."""
    try:
        return action()
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail={"message": e.message, "errors": e.details})
    except StorageUnavailable as e:
        logger.error(f"Settings write failed: {e.message}")
        raise HTTPException(status_code=503, detail="Settings storage unavailable, nothing was saved")


@router.post("/login", response_model=TokenResponse)
def login(payload: AdminLoginRequest):
    """exchange the administrator credential for a bearer token."""
    try:
        identity = authenticate_admin(payload.email, payload.password)
    except AuthorizationError as e:
        logger.warning(f"Rejected admin login for {payload.email!r}")
        raise HTTPException(status_code=401, detail=e.message)
    return TokenResponse(access_token=create_access_token(identity))


@router.get("/config", response_model=BusinessRulesOut)
def get_config(
    store: ConfigurationStore = Depends(get_store),
    _: str = Depends(require_admin),
):
    """current rules, straight from storage."""
    snapshot = store.snapshot(use_cache=False)
    return BusinessRulesOut(**snapshot.rules.model_dump(), cached_data=snapshot.stale)


@router.put("/config", response_model=BusinessRules)
def replace_config(
    payload: BusinessRules,
    store: ConfigurationStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    """replace the whole configuration."""
    return _write(lambda: update_rules(store, payload, updated_by=admin))


@router.post("/config/force-close", response_model=BusinessRules)
def force_close(
    payload: ForceCloseRequest,
    store: ConfigurationStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    """stop taking orders regardless of the schedule."""
    return _write(lambda: set_force_close(store, True, updated_by=admin, closed_message=payload.closed_message))


@router.post("/config/force-open", response_model=BusinessRules)
def force_open(
    store: ConfigurationStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    """lift the manual closure and go back to the schedule."""
    return _write(lambda: set_force_close(store, False, updated_by=admin))


@router.post("/config/special-closings", response_model=BusinessRules)
def create_special_closing(
    payload: SpecialClosingRequest,
    store: ConfigurationStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    """close on a given date; closing an already closed date changes nothing."""
    return _write(lambda: add_special_closing(store, payload.date, updated_by=admin, reason=payload.reason))


@router.delete("/config/special-closings/{day}", response_model=BusinessRules)
def delete_special_closing(
    day: date,
    store: ConfigurationStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    return _write(lambda: remove_special_closing(store, day, updated_by=admin))
