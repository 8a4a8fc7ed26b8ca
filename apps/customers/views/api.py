from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.customers.application.use_cases.deactivate_customer import (
    DeactivateCustomerCommand,
    DeactivateCustomerUseCase,
)
from apps.customers.application.use_cases.register_customer import (
    RegisterCustomerCommand,
    RegisterCustomerUseCase,
    TaxProfileData,
)
from apps.customers.domain.errors import CustomerDomainError
from apps.customers.serializers import CustomerRegisterSerializer, CustomerSerializer, TaxProfileSerializer
from apps.customers.services.customer_service import CustomerQueryService
from orderdesk.api_errors import error_response, invalid_input_response


class CustomerListCreateAPI(APIView):
    def get(self, request):
        email = request.query_params.get("email")
        if email:
            customer = CustomerQueryService.find_by_email(email)
            customers = [customer] if customer is not None else []
        else:
            customers = CustomerQueryService.list_customers()
        return Response(CustomerSerializer(customers, many=True).data)

    def post(self, request):
        serializer = CustomerRegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors, action="customer_register")

        data = serializer.validated_data
        tax_profile = data.get("tax_profile")
        cmd = RegisterCustomerCommand(
            full_name=data["full_name"],
            email=data["email"],
            tax_profile=TaxProfileData(**tax_profile) if tax_profile else None,
        )
        try:
            customer = RegisterCustomerUseCase.execute(cmd)
        except CustomerDomainError as exc:
            return error_response(exc, action="customer_register")

        customer = CustomerQueryService.get_customer(customer.id)
        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)


class CustomerDetailAPI(APIView):
    def get(self, request, customer_id: int):
        try:
            customer = CustomerQueryService.get_customer(customer_id)
        except CustomerDomainError as exc:
            return error_response(exc, action="customer_detail")
        return Response(CustomerSerializer(customer).data)


class CustomerDeactivateAPI(APIView):
    def post(self, request, customer_id: int):
        try:
            DeactivateCustomerUseCase.execute(DeactivateCustomerCommand(customer_id=customer_id))
        except CustomerDomainError as exc:
            return error_response(exc, action="customer_deactivate")
        customer = CustomerQueryService.get_customer(customer_id)
        return Response(CustomerSerializer(customer).data)


class TaxProfileLookupAPI(APIView):
    def get(self, request, tax_id: str):
        try:
            profile = CustomerQueryService.find_tax_profile(tax_id)
        except CustomerDomainError as exc:
            return error_response(exc, action="tax_profile_lookup")
        return Response(TaxProfileSerializer(profile).data)
