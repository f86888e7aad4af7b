from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'events'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.EventViewSet, basename='event')

urlpatterns = [
    # Event ViewSet routes
    # GET    /api/events/              - List events
    # POST   /api/events/              - Create event
    # GET    /api/events/{id}/         - Get event with participants and expenses
    # PUT    /api/events/{id}/         - Update event
    # PATCH  /api/events/{id}/         - Partial update
    # DELETE /api/events/{id}/         - Delete event

    # Custom event actions
    # GET    /api/events/{id}/participants/        - List participants
    # POST   /api/events/{id}/participants/        - Add participant
    # DELETE /api/events/{id}/participants/{pid}/  - Remove participant
    # GET    /api/events/{id}/expenses/            - List expenses
    # POST   /api/events/{id}/expenses/            - Record expense
    # GET    /api/events/{id}/summary/             - Balances and settlements

    # Include router URLs
    path('', include(router.urls)),
]
