# apps/ecommerce/views/orders.py

from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsAdminRole
from ..filters import OrderFilter
from ..models import Order
from ..serializers import AdminOrderSerializer, OrderSerializer, OrderStatusUpdateSerializer
from ..services import OrderService


class OrderHistoryView(generics.ListAPIView):
    """The caller's own orders, newest first"""
    serializer_class = OrderSerializer
    filter_backends = []

    def get_queryset(self):
        return OrderService().orders_for_user(self.request.user)


class OrderDetailView(generics.RetrieveAPIView):
    serializer_class = OrderSerializer

    def get_queryset(self):
        return OrderService().orders_for_user(self.request.user)


class AdminOrderListView(generics.ListAPIView):
    """All orders for fulfilment"""
    serializer_class = AdminOrderSerializer
    permission_classes = [IsAdminRole]
    queryset = Order.objects.select_related('user').prefetch_related('items').order_by('-created_at', '-id')
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter


class AdminOrderDetailView(APIView):
    """Read an order or change its status and tracking details"""
    permission_classes = [IsAdminRole]

    def get_object(self, pk):
        return get_object_or_404(
            Order.objects.select_related('user').prefetch_related('items'), pk=pk
        )

    def get(self, request, pk):
        return Response(AdminOrderSerializer(self.get_object(pk)).data)

    def patch(self, request, pk):
        order = self.get_object(pk)
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService().update_status(
            order,
            serializer.validated_data['status'],
            tracking_number=serializer.validated_data.get('tracking_number'),
            tracking_url=serializer.validated_data.get('tracking_url'),
        )
        return Response({
            'order': AdminOrderSerializer(order).data,
            'message': 'Order updated successfully',
        })

    put = patch
