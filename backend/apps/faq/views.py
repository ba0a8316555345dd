# apps/faq/views.py

import logging

from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth.permissions import IsAdminRole
from .models import FaqEntry
from .serializers import FaqEntrySerializer, FaqMoveSerializer
from .services import FaqService

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_faq_list(request):
    """Visible FAQ entries in display order"""
    entries = FaqEntry.objects.filter(is_visible=True).order_by('order', 'id')
    return Response({'faqs': FaqEntrySerializer(entries, many=True).data})


class AdminFaqListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        entries = FaqEntry.objects.order_by('order', 'id')
        return Response({'faqs': FaqEntrySerializer(entries, many=True).data})

    def post(self, request):
        serializer = FaqEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save()

        logger.info(f"Admin {request.user.id} created FAQ entry {entry.id}")
        return Response({'faq': FaqEntrySerializer(entry).data}, status=status.HTTP_201_CREATED)


class AdminFaqDetailView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, pk):
        entry = get_object_or_404(FaqEntry, pk=pk)
        return Response({'faq': FaqEntrySerializer(entry).data})

    def put(self, request, pk):
        entry = get_object_or_404(FaqEntry, pk=pk)
        serializer = FaqEntrySerializer(entry, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save()
        return Response({'faq': FaqEntrySerializer(entry).data})

    patch = put

    def delete(self, request, pk):
        entry = get_object_or_404(FaqEntry, pk=pk)
        entry.delete()
        logger.info(f"Admin {request.user.id} deleted FAQ entry {pk}")
        return Response({'message': 'Deleted'})


class AdminFaqMoveView(APIView):
    """Move an entry one position up or down"""
    permission_classes = [IsAdminRole]

    def post(self, request, pk):
        serializer = FaqMoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        FaqService.move(pk, serializer.validated_data['direction'])
        entries = FaqEntry.objects.order_by('order', 'id')
        return Response({'faqs': FaqEntrySerializer(entries, many=True).data})
