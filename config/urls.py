"""URL configuration for the Vilo project.

Every domain app mounts its DRF router under ``api/v1/``. Tenant-scoped
endpoints read the tenant from the ``X-Tenant-ID`` header.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # Auth
    path('api/v1/auth/token/', TokenObtainPairView.as_view(), name='token-obtain-pair'),
    path('api/v1/auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    # Application URLs
    path('api/v1/tenants/', include('apps.tenants.urls')),
    path('api/v1/rooms/', include('apps.rooms.urls')),
    path('api/v1/addons/', include('apps.addons.urls')),
    path('api/v1/coupons/', include('apps.coupons.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    # API schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
