# apps/ecommerce/views/cart.py

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import AddToCartSerializer, MergeCartSerializer, UpdateCartItemSerializer
from ..serializers.cart import cart_payload
from ..services import CartService


class CartView(APIView):
    """Read the caller's cart, add to it or empty it"""

    def get(self, request):
        return Response(cart_payload(CartService().get_summary(request.user)))

    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = CartService()
        service.add_to_cart(
            request.user,
            serializer.validated_data['product_id'],
            serializer.validated_data['quantity'],
        )
        return Response(cart_payload(service.get_summary(request.user)), status=status.HTTP_201_CREATED)

    def delete(self, request):
        service = CartService()
        service.clear_cart(request.user)
        return Response(cart_payload(service.get_summary(request.user)))


class CartItemView(APIView):
    """Change or remove a single cart line, addressed by product id"""

    def patch(self, request, product_id):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = CartService()
        service.update_quantity(request.user, product_id, serializer.validated_data['quantity'])
        return Response(cart_payload(service.get_summary(request.user)))

    put = patch

    def delete(self, request, product_id):
        service = CartService()
        service.remove_from_cart(request.user, product_id)
        return Response(cart_payload(service.get_summary(request.user)))


class MergeCartView(APIView):
    """Fold a cart collected before sign-in into the server cart"""

    def post(self, request):
        serializer = MergeCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = CartService()
        service.merge(request.user, serializer.validated_data['items'])
        return Response(cart_payload(service.get_summary(request.user)))
