"""
URL configuration for the Barberbook booking system.
"""
from django.contrib import admin
from django.conf import settings
from django.urls import path, include

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path('barbershops/', include('apps.barbershops.urls', namespace='barbershops')),
    path('bookings/', include('apps.bookings.urls', namespace='bookings')),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [path('__debug__/', include(debug_toolbar.urls))] + urlpatterns
