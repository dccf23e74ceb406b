from django.urls import path
from . import views

app_name = 'contacts'

urlpatterns = [
    # Companies
    path('companies/', views.company_list_view, name='company_list'),
    path('companies/<int:pk>/', views.company_detail_view, name='company_detail'),

    # Persons
    path('persons/', views.person_list_view, name='person_list'),
    path('persons/<int:pk>/', views.person_detail_view, name='person_detail'),
    path('persons/<int:pk>/company/', views.person_assign_company_view, name='person_assign_company'),
]
