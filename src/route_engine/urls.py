from django.urls import path

from route_engine import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/routes", views.route_calculate_view, name="route-calculate"),
    path("api/v1/routes/analysis", views.route_analysis_view, name="route-analysis"),
    path("api/v1/routes/cache/clear", views.clear_cache_view, name="route-cache-clear"),
]
