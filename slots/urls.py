from django.urls import path
from .views import TeeSheetView

urlpatterns = [
    path("bookings/availability/", TeeSheetView.as_view(), name="tee-sheet"),
]
