from django.urls import path
from . import views

app_name = 'deals'

urlpatterns = [
    path('', views.deal_list_view, name='deal_list'),
    path('export/', views.deal_export_view, name='deal_export'),
    path('<int:pk>/', views.deal_detail_view, name='deal_detail'),
    path('<int:pk>/status/', views.deal_change_status_view, name='deal_change_status'),
    path('<int:pk>/close/', views.deal_close_view, name='deal_close'),
    path('<int:pk>/reassign/', views.deal_reassign_view, name='deal_reassign'),

    # Activities
    path('activities/', views.activity_list_view, name='activity_list'),
    path('activities/<int:pk>/', views.activity_detail_view, name='activity_detail'),
    path('activities/my/done/', views.my_done_activities_view, name='my_done_activities'),
    path('activities/my/overdue/', views.my_overdue_activities_view, name='my_overdue_activities'),
    path('activities/my/planned/', views.my_planned_activities_view, name='my_planned_activities'),
    path('activities/overdue-count/', views.overdue_count_view, name='overdue_count'),
]
