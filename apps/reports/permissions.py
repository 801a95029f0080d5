"""
Custom permission classes for reports app.

Permission Classes:
    CanAccessRequestedStore - Owners may only ask for their own stores

Usage:
    @api_view(['GET'])
    @permission_classes([IsAuthenticated, CanAccessRequestedStore])
    def dashboard(request):
        # An explicit ?store_id= has already been checked
        ...
"""

import uuid

from rest_framework.permissions import BasePermission

from apps.stores.services import user_can_access_store


class CanAccessRequestedStore(BasePermission):
    """
    Permission check for store-filtered reports.

    Access is allowed if:
    - No store_id query parameter is given (results are scoped anyway)
    - The user is an administrator
    - The user is assigned to the requested store

    A malformed store_id is let through so the query serializer can
    answer 400 instead of 403.
    """

    message = 'You are not assigned to this store.'

    def has_permission(self, request, view):
        store_id = request.query_params.get('store_id')
        if not store_id:
            return True

        try:
            store_uuid = uuid.UUID(str(store_id))
        except ValueError:
            return True

        return user_can_access_store(user=request.user, store_id=store_uuid)
