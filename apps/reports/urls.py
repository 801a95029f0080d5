from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),

    # Monthly archive
    path('archive/', views.monthly_archive, name='archive'),

    # Period report and CSV download
    path('period/', views.period_report, name='period'),
    path('export/', views.export_csv, name='export'),

    # Chart data
    path('timeseries/', views.recovery_timeseries, name='timeseries'),
]
