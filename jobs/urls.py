# jobs/urls.py
from django.urls import path
from . import views

urlpatterns = [
    # browsing
    path('job-roles/', views.job_role_list, name='job_role_list'),
    path('jobs/search/', views.job_role_search, name='job_role_search'),
    path('job-roles/<str:job_role_id>/', views.job_role_detail, name='job_role_detail'),
    path('health/', views.health, name='health'),

    # application flow
    path('job-roles/<str:job_role_id>/apply/', views.apply, name='job_role_apply'),

    # admin job role management
    path('admin/job-roles/new/', views.job_role_create, name='job_role_create'),
    path('admin/job-roles/export/', views.job_roles_export, name='job_roles_export'),
    path('admin/job-roles/<str:job_role_id>/edit/', views.job_role_edit, name='job_role_edit'),
    path('job-roles/<str:job_role_id>/delete/', views.job_role_delete, name='job_role_delete'),

    # admin applicant review
    path('job-roles/<str:job_role_id>/applicants/', views.applicants, name='applicants'),
    path('applications/<str:application_id>/cv/', views.download_cv, name='download_cv'),
    path('job-roles/<str:job_role_id>/applications/<str:application_id>/accept/',
         views.accept_applicant, name='accept_applicant'),
    path('job-roles/<str:job_role_id>/applications/<str:application_id>/reject/',
         views.reject_applicant, name='reject_applicant'),
]
