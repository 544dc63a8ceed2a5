# jobportal/urls.py
from django.urls import path, include

from jobs import views as jobs_views

urlpatterns = [
    # Home
    path('', jobs_views.home, name='home'),

    # Auth (login/register/logout, session based)
    path('', include('accounts.urls')),

    # Job roles, applications, admin pages
    path('', include('jobs.urls')),
]
