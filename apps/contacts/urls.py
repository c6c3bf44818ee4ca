from django.urls import path
from . import views

app_name = 'contacts'

urlpatterns = [
    path('<int:pk>/transitions/', views.contact_transition_options_view, name='contact_transition_options'),
    path('<int:pk>/transition/', views.contact_transition_view, name='contact_transition'),
    path('internal/lead-activity/', views.lead_activity_view, name='lead_activity'),
]
