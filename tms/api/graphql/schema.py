"""
GraphQL schema: queries and mutations bound to the shipment services.

Resolvers stay thin. Authorization, validation and store access all happen
in the services, and their errors reach the client unchanged as one
``errors`` entry each, with the error code under ``extensions.code``.
"""
import logging
from typing import Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.types import ExecutionContext, Info

from tms.api.graphql.context import GraphQLContext
from tms.api.graphql.types import (
    AuthPayloadType,
    CreateShipmentInput,
    PaginationInput,
    ShipmentFilterInput,
    ShipmentsResponseType,
    ShipmentStatsType,
    ShipmentType,
    SortInput,
    UpdateShipmentInput,
    UserType,
)
from tms.core.exceptions import TMSError

logger = logging.getLogger(__name__)

TMSInfo = Info[GraphQLContext, None]


@strawberry.type
class Query:

    @strawberry.field(description="Current authenticated user")
    def me(self, info: TMSInfo) -> Optional[UserType]:
        caller = info.context.caller
        return UserType.from_model(caller) if caller else None

    @strawberry.field(description="Shipments with optional filtering, pagination, and sorting")
    def shipments(
        self,
        info: TMSInfo,
        filter: Optional[ShipmentFilterInput] = None,
        pagination: Optional[PaginationInput] = None,
        sort: Optional[SortInput] = None,
    ) -> ShipmentsResponseType:
        page = info.context.shipment_service.list_shipments(
            info.context.caller,
            filter_spec=filter.to_params() if filter else None,
            pagination=pagination.to_params() if pagination else None,
            sort=sort.to_params() if sort else None,
        )
        return ShipmentsResponseType.from_page(page)

    @strawberry.field(description="A single shipment by ID")
    def shipment(self, info: TMSInfo, id: strawberry.ID) -> Optional[ShipmentType]:
        shipment = info.context.shipment_service.get_shipment(info.context.caller, str(id))
        return ShipmentType.from_record(shipment) if shipment else None

    @strawberry.field(description="Status counts over all shipments")
    def shipment_stats(self, info: TMSInfo) -> ShipmentStatsType:
        stats = info.context.shipment_service.get_stats(info.context.caller)
        return ShipmentStatsType.from_stats(stats)


@strawberry.type
class Mutation:

    @strawberry.mutation
    def login(self, info: TMSInfo, email: str, password: str) -> AuthPayloadType:
        payload = info.context.auth_service.login(email, password)
        return AuthPayloadType.from_model(payload)

    @strawberry.mutation(description="Admin only")
    def create_shipment(self, info: TMSInfo, input: CreateShipmentInput) -> ShipmentType:
        shipment = info.context.shipment_service.create_shipment(
            info.context.caller, input.to_data()
        )
        return ShipmentType.from_record(shipment)

    @strawberry.mutation(description="Admin only")
    def update_shipment(
        self, info: TMSInfo, id: strawberry.ID, input: UpdateShipmentInput
    ) -> ShipmentType:
        shipment = info.context.shipment_service.update_shipment(
            info.context.caller, str(id), input.to_data()
        )
        return ShipmentType.from_record(shipment)

    @strawberry.mutation(description="Admin only")
    def delete_shipment(self, info: TMSInfo, id: strawberry.ID) -> bool:
        return info.context.shipment_service.delete_shipment(info.context.caller, str(id))

    @strawberry.mutation(description="Admin and employee")
    def toggle_shipment_flag(self, info: TMSInfo, id: strawberry.ID) -> ShipmentType:
        shipment = info.context.shipment_service.toggle_flag(info.context.caller, str(id))
        return ShipmentType.from_record(shipment)


class OperationLogger(SchemaExtension):
    """Log each named operation once it has completed."""

    def on_operation(self):
        yield
        operation_name = self.execution_context.operation_name
        if operation_name:
            logger.info(f"[GraphQL] {operation_name} completed")


class TMSSchema(strawberry.Schema):
    """Schema that logs expected business errors quietly."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        unexpected = []
        for error in errors:
            if isinstance(error.original_error, TMSError):
                logger.info(f"GraphQL {error.original_error.code}: {error.message}")
            else:
                unexpected.append(error)
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = TMSSchema(query=Query, mutation=Mutation, extensions=[OperationLogger])
