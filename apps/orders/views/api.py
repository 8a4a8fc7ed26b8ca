from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.catalog.domain.errors import CatalogDomainError
from apps.customers.domain.errors import CustomerDomainError
from orderdesk.api_errors import error_response, invalid_input_response

from ..domain.errors import OrderDomainError
from ..serializers import OrderCreateInputSerializer, OrderSerializer
from ..services.order_service import OrderLine, OrderService

_WORKFLOW_ERRORS = (OrderDomainError, CatalogDomainError, CustomerDomainError)


class OrderListCreateAPI(APIView):
    def get(self, request):
        order_status = request.query_params.get("status")
        if not order_status:
            return invalid_input_response({"status": ["This query parameter is required."]}, action="order_list")
        try:
            orders = OrderService.list_by_status(order_status)
        except OrderDomainError as exc:
            return error_response(exc, action="order_list")
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request):
        input_serializer = OrderCreateInputSerializer(data=request.data)
        if not input_serializer.is_valid():
            return invalid_input_response(input_serializer.errors, action="order_create")

        data = input_serializer.validated_data
        lines = [OrderLine(product_id=item["product_id"], quantity=item["quantity"]) for item in data["items"]]
        try:
            order = OrderService.create_order(
                customer_id=data["customer_id"],
                items=lines,
                street=data["street"],
                city=data["city"],
                postal_code=data["postal_code"],
            )
        except _WORKFLOW_ERRORS as exc:
            return error_response(exc, action="order_create")

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailAPI(APIView):
    def get(self, request, order_id: int):
        try:
            order = OrderService.get_order(order_id)
        except OrderDomainError as exc:
            return error_response(exc, action="order_detail")
        return Response(OrderSerializer(order).data)


class _OrderTransitionAPI(APIView):
    action_name = ""

    def transition(self, order_id: int):
        raise NotImplementedError

    def post(self, request, order_id: int):
        try:
            order = self.transition(order_id)
        except OrderDomainError as exc:
            return error_response(exc, action=self.action_name)
        return Response(OrderSerializer(order).data)


class OrderCancelAPI(_OrderTransitionAPI):
    action_name = "order_cancel"

    def transition(self, order_id: int):
        return OrderService.cancel_order(order_id)


class OrderShipAPI(_OrderTransitionAPI):
    action_name = "order_ship"

    def transition(self, order_id: int):
        return OrderService.mark_as_shipped(order_id)


class OrderDeliverAPI(_OrderTransitionAPI):
    action_name = "order_deliver"

    def transition(self, order_id: int):
        return OrderService.mark_as_delivered(order_id)


class CustomerOrdersAPI(APIView):
    def get(self, request, customer_id: int):
        orders = OrderService.list_for_customer(customer_id)
        return Response(OrderSerializer(orders, many=True).data)
