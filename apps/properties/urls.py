from django.urls import path
from . import views

app_name = 'properties'

urlpatterns = [
    path('locations/', views.location_list_view, name='location_list'),

    # Buildings
    path('buildings/', views.building_list_view, name='building_list'),
    path('buildings/<int:pk>/', views.building_detail_view, name='building_detail'),
    path('buildings/<int:pk>/units/', views.unit_list_view, name='unit_list'),

    # Units
    path('units/<int:pk>/', views.unit_detail_view, name='unit_detail'),
]
