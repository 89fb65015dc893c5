from django.urls import path

from . import views

app_name = "pitches"

urlpatterns = [
    path("questions/", views.wizard_questions, name="questions"),
    path("estimate/", views.cost_estimate, name="estimate"),
    path("usage/", views.usage_stats, name="usage"),
    path("generations/", views.list_generations, name="list"),
    path("generations/create/", views.create_generation, name="create"),
    path("generations/<str:record_id>/", views.generation_detail, name="detail"),
    path("generations/<str:record_id>/clone/", views.clone_generation, name="clone"),
    path("generations/<str:record_id>/voice/", views.change_voice, name="voice"),
    path("generations/<str:record_id>/script/", views.generate_script, name="script"),
    path("generations/<str:record_id>/script/retry/", views.retry_script, name="retry_script"),
    path("generations/<str:record_id>/script/edit/", views.edit_script, name="edit_script"),
    path("generations/<str:record_id>/preview/", views.generate_preview, name="preview"),
    path("generations/<str:record_id>/preview/retry/", views.retry_preview, name="retry_preview"),
    path("generations/<str:record_id>/hq/", views.generate_hq, name="hq"),
    path("generations/<str:record_id>/hq/retry/", views.retry_hq, name="retry_hq"),
]
