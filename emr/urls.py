"""
URL configuration for the EMR backend.

Routes the REST API (``/api/...``) from the records app, the Django
admin, the Prometheus scrape endpoint and the OpenAPI documentation at
``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

api_info = openapi.Info(
    title="SUD EMR API",
    default_version='v1',
    description="Administrative services for the SUD EMR hospital system: billing, "
                "HMO claims, pharmacy stock, banks and system settings.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('django_prometheus.urls')),
    path('', include('records.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
