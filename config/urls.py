"""URL configuration for the hotel reservation project.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application-level routers provided by Django Rest Framework and each app.
"""
from django.conf import settings  # type: ignore
from django.conf.urls.static import static  # type: ignore
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include('apps.users.auth_urls', namespace='auth')),
    path('api/v1/hotels/', include('apps.hotels.urls', namespace='hotels')),
    path('api/v1/bookings/', include('apps.bookings.urls', namespace='bookings')),
    path('api/v1/payments/', include('apps.payments.urls', namespace='payments')),
    # Management areas
    path('api/v1/admin/', include('apps.users.api.urls', namespace='admin_api')),
    path('api/v1/company/', include('apps.hotels.company_urls', namespace='company')),
    # API schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
