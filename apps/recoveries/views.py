from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdminOrReadOnly

from .serializers import (
    DailyRecoverySerializer,
    DailyRecoveryInputSerializer,
    RecoveryFilterSerializer,
)

from apps.recoveries.services import (
    list_recoveries,
    get_recovery,
    create_recovery,
    update_recovery,
    delete_recovery,
    # Exceptions
    RecoveryNotFoundError,
    InactiveStoreError,
    InsufficientPermissionsError,
)


class RecoveryPagination(PageNumberPagination):
    """Custom pagination for recoveries."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


class DailyRecoveryViewSet(viewsets.GenericViewSet):
    """
    ViewSet for DailyRecovery CRUD operations.

    Reads are scoped to the user's stores, writes are for administrators.
    All business logic is handled by services.

    list: Recoveries filtered by store, start_date and end_date
    create: Record a day (admin only)
    retrieve: Get a specific recovery (403 for another owner's store)
    update / partial_update: Edit a recovery (admin only)
    destroy: Delete a recovery (admin only)
    """

    serializer_class = DailyRecoverySerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    pagination_class = RecoveryPagination
    lookup_value_regex = '[0-9a-fA-F-]{32,36}'

    def get_queryset(self):
        filter_serializer = RecoveryFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_recoveries(
            user=self.request.user,
            store_id=params.get('store'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )

    def _get_recovery_or_error(self, request, pk):
        """Return (recovery, None) or (None, error response)."""
        try:
            return get_recovery(recovery_id=pk, user=request.user), None
        except RecoveryNotFoundError as e:
            return None, Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return None, Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(
        parameters=[
            OpenApiParameter('store', str, description='Store UUID'),
            OpenApiParameter('start_date', str, description='First day (YYYY-MM-DD), inclusive'),
            OpenApiParameter('end_date', str, description='Last day (YYYY-MM-DD), inclusive'),
        ],
        responses={200: DailyRecoverySerializer(many=True)},
        tags=['recoveries'],
    )
    def list(self, request):
        """List recoveries visible to the user."""
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        serializer = DailyRecoverySerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: DailyRecoverySerializer}, tags=['recoveries'])
    def retrieve(self, request, pk=None):
        """Get one recovery."""
        recovery, error = self._get_recovery_or_error(request, pk)
        if error:
            return error
        return Response(DailyRecoverySerializer(recovery).data)

    @extend_schema(
        request=DailyRecoveryInputSerializer,
        responses={201: DailyRecoverySerializer},
        tags=['recoveries'],
    )
    def create(self, request):
        """Record a store's daily figures."""
        serializer = DailyRecoveryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            recovery = create_recovery(created_by=request.user, **serializer.validated_data)
        except InactiveStoreError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = DailyRecoverySerializer(recovery)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def _update(self, request, pk, partial):
        recovery, error = self._get_recovery_or_error(request, pk)
        if error:
            return error

        serializer = DailyRecoveryInputSerializer(recovery, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            recovery = update_recovery(recovery_id=recovery.id, **serializer.validated_data)
        except RecoveryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InactiveStoreError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DailyRecoverySerializer(recovery).data)

    @extend_schema(
        request=DailyRecoveryInputSerializer,
        responses={200: DailyRecoverySerializer},
        tags=['recoveries'],
    )
    def update(self, request, pk=None):
        """Replace a recovery's figures."""
        return self._update(request, pk, partial=False)

    @extend_schema(
        request=DailyRecoveryInputSerializer,
        responses={200: DailyRecoverySerializer},
        tags=['recoveries'],
    )
    def partial_update(self, request, pk=None):
        """Change only the given fields of a recovery."""
        return self._update(request, pk, partial=True)

    @extend_schema(tags=['recoveries'])
    def destroy(self, request, pk=None):
        """Delete a recovery."""
        try:
            delete_recovery(recovery_id=pk)
        except RecoveryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
