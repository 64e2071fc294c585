from fastapi import Depends, Request

from app.services.provider_router import ProviderRouter


def provider_router(request: Request) -> ProviderRouter:
    return request.app.state.provider_router


ProviderRouterDep = Depends(provider_router)
