from rest_framework import permissions


class CanAccessStore(permissions.BasePermission):
    """
    Permission: Admins see every store, owners only the stores assigned to them.
    """

    message = "You are not assigned to this store."

    def has_object_permission(self, request, view, obj):
        # obj is a Store instance
        if request.user.is_admin:
            return True
        return obj.has_owner(request.user)
