"""URL configuration for the camp booking backend.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the OpenAPI schema and the application‑level routers of each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/users/', include('apps.users.urls')),
    path('api/v1/customers/', include('apps.customers.urls')),
    path('api/v1/projects/', include('apps.projects.urls')),
    path('api/v1/packages/', include('apps.packages.urls')),
    path('api/v1/accommodations/', include('apps.accommodations.urls')),
    path('api/v1/orders/', include('apps.orders.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/public/', include('apps.bookings.public_urls')),
    path('api/v1/schedules/', include('apps.schedules.urls')),
    path('api/v1/shuttle/', include('apps.shuttle.urls')),
    path('api/v1/dashboard/', include('apps.dashboard.urls')),
    path('api/v1/site-config/', include('apps.siteconfig.urls')),
]
