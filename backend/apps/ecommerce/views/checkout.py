# apps/ecommerce/views/checkout.py

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsEmailVerified
from ..serializers import CheckoutSerializer
from ..services import CheckoutService


class CheckoutView(APIView):
    """Start a hosted Stripe Checkout for the cart or an explicit item list"""
    permission_classes = [permissions.IsAuthenticated, IsEmailVerified]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = CheckoutService().create_session(
            request.user,
            items=serializer.validated_data.get('items'),
            address_id=serializer.validated_data.get('address_id'),
        )
        return Response(session, status=status.HTTP_200_OK)
