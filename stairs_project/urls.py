"""
URL configuration for stairs_project project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('identifiers.api_urls')),
]
