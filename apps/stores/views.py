from rest_framework import viewsets, mixins, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdminRole, IsAdminOrReadOnly

from .models import Store
from .serializers import (
    StoreSerializer,
    StoreCreateSerializer,
    StoreUpdateSerializer,
    StoreOwnerAssignmentSerializer,
    AssignOwnerSerializer,
    OwnerProfileSerializer,
)
from .permissions import CanAccessStore

from apps.stores.services import (
    create_store,
    update_store,
    deactivate_store,
    visible_stores,
    assign_owner,
    remove_assignment,
    get_assignments,
    get_owner_profiles,
    # Exceptions
    StoreNotFoundError,
    DuplicateStoreCodeError,
    AlreadyAssignedError,
    AssignmentNotFoundError,
    NotAnOwnerError,
    UserNotFoundError,
)


class StoreViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Store CRUD operations.

    Business logic lives in services, views only translate HTTP.

    list: Active stores visible to the user (admins may pass include_inactive=true)
    create: Create a store (admin only)
    retrieve: Get a store the user may access
    partial_update: Update a store (admin only)
    destroy: Deactivate a store (admin only, soft delete)
    """

    serializer_class = StoreSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly, CanAccessStore]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action == 'list':
            include_inactive = (
                self.request.user.is_admin
                and self.request.query_params.get('include_inactive') == 'true'
            )
            return visible_stores(user=self.request.user, include_inactive=include_inactive)
        # Detail routes resolve any store, CanAccessStore answers 403 for foreign ones
        return Store.objects.all()

    @extend_schema(
        parameters=[
            OpenApiParameter('include_inactive', bool, description='Admins only: include deactivated stores'),
        ],
        tags=['stores'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=StoreCreateSerializer, responses={201: StoreSerializer}, tags=['stores'])
    def create(self, request, *args, **kwargs):
        """Create a new store."""
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = create_store(**serializer.validated_data)
        except DuplicateStoreCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(StoreSerializer(store).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=StoreUpdateSerializer, responses={200: StoreSerializer}, tags=['stores'])
    def partial_update(self, request, *args, **kwargs):
        """Update store details."""
        store = self.get_object()
        serializer = StoreUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            store = update_store(store_id=store.id, **serializer.validated_data)
        except DuplicateStoreCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(StoreSerializer(store).data)

    @extend_schema(tags=['stores'])
    def destroy(self, request, *args, **kwargs):
        """Deactivate a store; its recoveries stay in the history."""
        store = self.get_object()
        try:
            deactivate_store(store_id=store.id)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StoreOwnerViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    Owner assignments (admin only).

    list: All assignments, optionally filtered by ?store_id=
    create: Assign an owner to a store (409 when already assigned)
    destroy: Remove an assignment
    """

    serializer_class = StoreOwnerAssignmentSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return get_assignments(store_id=self.request.query_params.get('store_id') or None)

    @extend_schema(
        parameters=[OpenApiParameter('store_id', str, description='Filter by store UUID')],
        tags=['stores'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=AssignOwnerSerializer, responses={201: StoreOwnerAssignmentSerializer}, tags=['stores'])
    def create(self, request, *args, **kwargs):
        """Assign an owner to a store."""
        serializer = AssignOwnerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            assignment = assign_owner(
                store_id=serializer.validated_data['store_id'],
                user_id=serializer.validated_data['user_id'],
            )
        except AlreadyAssignedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except (StoreNotFoundError, UserNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotAnOwnerError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = StoreOwnerAssignmentSerializer(assignment)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=['stores'])
    def destroy(self, request, *args, **kwargs):
        """Remove an owner assignment."""
        try:
            remove_assignment(assignment_id=self.kwargs['pk'])
        except AssignmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: OwnerProfileSerializer(many=True)},
    description="Users holding the owner role, with their current store assignments.",
    tags=['stores'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def owner_profiles(request):
    """List owner accounts available for assignment."""
    owners = get_owner_profiles().prefetch_related('store_assignments__store')
    serializer = OwnerProfileSerializer(owners, many=True)
    return Response(serializer.data)
