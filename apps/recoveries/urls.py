from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'recoveries'

router = DefaultRouter()
router.register(r'', views.DailyRecoveryViewSet, basename='recovery')

urlpatterns = [
    # GET    /api/recoveries/?store=&start_date=&end_date=  - Filtered list
    # POST   /api/recoveries/                               - Record a day (admin)
    # GET    /api/recoveries/{id}/                          - Recovery details
    # PUT    /api/recoveries/{id}/                          - Replace (admin)
    # PATCH  /api/recoveries/{id}/                          - Partial update (admin)
    # DELETE /api/recoveries/{id}/                          - Delete (admin)
    path('', include(router.urls)),
]
