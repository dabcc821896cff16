from fastapi import Request

from storefront.services.settings import ConfigurationStore


def get_store(request: Request) -> ConfigurationStore:
    """settings store created by the app factory."""
    return request.app.state.settings_store
