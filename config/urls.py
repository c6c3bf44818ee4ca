from django.contrib import admin
from django.urls import path, include

# Main URL Configuration

urlpatterns = [
    path('admin/', admin.site.urls),
    path('contacts/', include('apps.contacts.urls')),
]
