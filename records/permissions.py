"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "admin")


class IsAdminOrReadOnly(BasePermission):
    """Any authenticated user may read; writes need the admin role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return request.method in SAFE_METHODS or getattr(user, "role", None) == "admin"


class IsPharmacyReviewer(BasePermission):
    """Admins, or staff assigned to the main pharmacy."""
    message = "Only Main Pharmacy staff can review transfers"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if getattr(user, "role", None) == "admin":
            return True
        pharmacy = getattr(user, "assigned_pharmacy", None)
        return bool(pharmacy and pharmacy.is_main_pharmacy)
