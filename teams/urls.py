# teams/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import TeamViewSet, TeamRequestDecisionView

router = DefaultRouter()
router.register(r'teams', TeamViewSet, basename='team')

urlpatterns = [
    path('', include(router.urls)),
    path('team-requests/<uuid:pk>/', TeamRequestDecisionView.as_view(), name='team-request-decision'),
]
