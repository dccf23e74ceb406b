from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('kpis/', views.kpis_view, name='kpis'),
    path('monthly-sales/', views.monthly_sales_view, name='monthly_sales'),
    path('pipeline/', views.pipeline_view, name='pipeline'),
    path('expiring-leases/', views.expiring_leases_view, name='expiring_leases'),
]
