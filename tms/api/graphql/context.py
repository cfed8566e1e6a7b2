"""Per-request GraphQL context."""
from typing import Annotated, Optional

from fastapi import Depends
from strawberry.fastapi import BaseContext

from tms.core.dependencies import get_auth_service, get_current_user, get_shipment_service
from tms.schemas.auth import UserResponse
from tms.services.auth import AuthService
from tms.services.shipments import ShipmentService


class GraphQLContext(BaseContext):
    """Caller and services available to every resolver.

    ``caller`` is None for anonymous requests; it lives for one request only.
    """

    def __init__(
        self,
        caller: Optional[UserResponse],
        auth_service: AuthService,
        shipment_service: ShipmentService,
    ):
        super().__init__()
        self.caller = caller
        self.auth_service = auth_service
        self.shipment_service = shipment_service


async def get_context(
    caller: Annotated[Optional[UserResponse], Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    shipment_service: Annotated[ShipmentService, Depends(get_shipment_service)],
) -> GraphQLContext:
    return GraphQLContext(
        caller=caller,
        auth_service=auth_service,
        shipment_service=shipment_service,
    )
