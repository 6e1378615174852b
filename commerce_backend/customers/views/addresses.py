# customers/views/addresses.py

"""
CUSTOMER ADDRESS BOOK

GET    /api/customer/addresses/        own addresses (default first)
POST   /api/customer/addresses/        add an address
DELETE /api/customer/addresses/<id>/   remove an own address (403 otherwise)
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.identifiers import parse_id
from common.responses import success_response
from customers.authentication import CustomerJWTAuthentication
from customers.throttling import CUSTOMER_THROTTLES
from customers.serializers.address import AddressSerializer
from customers.services import address_service


class AddressListView(APIView):
    authentication_classes = [CustomerJWTAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = CUSTOMER_THROTTLES
    serializer_class = AddressSerializer

    @extend_schema(responses={200: AddressSerializer(many=True)})
    def get(self, request):
        addresses = address_service.list_addresses(request.user)
        return success_response(AddressSerializer(addresses, many=True).data)

    @extend_schema(request=AddressSerializer, responses={201: AddressSerializer})
    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        address = address_service.create_address(request.user, dict(serializer.validated_data))
        return success_response(
            AddressSerializer(address).data,
            message="Address added",
            status=status.HTTP_201_CREATED,
        )


class AddressDetailView(APIView):
    authentication_classes = [CustomerJWTAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = CUSTOMER_THROTTLES

    @extend_schema(responses={200: dict})
    def delete(self, request, address_id):
        record_id = parse_id(address_id, "address_id")
        address_service.delete_address(request.user, record_id)
        return success_response({"id": record_id}, message=f"Deleted address with ID {record_id}")
