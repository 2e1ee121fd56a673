"""
API URL patterns for identifier lookups.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('identifiers/validate/', views.validate_identifier, name='validate_identifier'),
    path('identifiers/display/', views.display_identifier, name='display_identifier'),
]
