from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/accounts/", include("Accounts.urls")),
    path("api/", include("slots.urls")),
    path("api/", include("TeeTimes.urls")),
]
