from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stores'

router = DefaultRouter()
router.register(r'owners', views.StoreOwnerViewSet, basename='store-owner')
router.register(r'', views.StoreViewSet, basename='store')

urlpatterns = [
    # GET    /api/stores/                 - List visible stores
    # POST   /api/stores/                 - Create store (admin)
    # GET    /api/stores/{id}/            - Store details
    # PATCH  /api/stores/{id}/            - Update store (admin)
    # DELETE /api/stores/{id}/            - Deactivate store (admin)
    # GET    /api/stores/owners/          - List assignments (admin)
    # POST   /api/stores/owners/          - Assign owner (admin)
    # DELETE /api/stores/owners/{id}/     - Remove assignment (admin)
    path('owner-profiles/', views.owner_profiles, name='owner-profiles'),

    path('', include(router.urls)),
]
