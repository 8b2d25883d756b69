from django.urls import path

from .views import (
    AllBookingsView,
    BookingCreateView,
    BookingDetailView,
    BookingStatusView,
    MyBookingsView,
)

urlpatterns = [
    path("bookings/", BookingCreateView.as_view(), name="booking-create"),
    path("bookings/mine/", MyBookingsView.as_view(), name="booking-mine"),
    path("bookings/all/", AllBookingsView.as_view(), name="booking-all"),
    path("bookings/<int:booking_id>/", BookingDetailView.as_view(), name="booking-detail"),
    path("bookings/<int:booking_id>/status/", BookingStatusView.as_view(), name="booking-status"),
]
