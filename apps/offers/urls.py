from django.urls import path
from . import views

app_name = 'offers'

urlpatterns = [
    path('', views.offer_list_view, name='offer_list'),
    path('<int:pk>/', views.offer_detail_view, name='offer_detail'),
    path('by-request/<int:request_id>/', views.offers_by_request_view, name='offers_by_request'),
    path('<int:pk>/groups/', views.offer_group_create_view, name='offer_group_create'),
    path('groups/<int:pk>/', views.offer_group_detail_view, name='offer_group_detail'),
]
