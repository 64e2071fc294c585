from fastapi import APIRouter

from app.api.deps import ProviderRouterDep
from app.api.schemas import DataEnvelope, ModelRouteRead
from app.services.provider_router import ProviderRouter

router = APIRouter(tags=["models"])


@router.get("/models", response_model=DataEnvelope[list[ModelRouteRead]])
def list_model_routes(providers: ProviderRouter = ProviderRouterDep):
    return DataEnvelope(data=[ModelRouteRead.model_validate(route) for route in providers.describe()])
