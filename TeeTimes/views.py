from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from . import store
from .admission import admit_booking, cancel_booking, mark_booking_status, update_booking
from .exceptions import BookingNotFound, NotAuthorized
from .models import Booking
from .permissions import IsClubAdmin, can_view
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingListQuerySerializer,
    BookingSerializer,
    BookingStatusSerializer,
    BookingUpdateSerializer,
)


def booking_response(result, message, http_status=status.HTTP_200_OK, **extra):
    if result.error:
        raise result.error

    return Response({
        "status": "success",
        "message": message,
        "data": BookingSerializer(result.booking).data,
        **extra,
    }, status=http_status)


# -------------------------------------------------------------------
# BOOKING CREATE (GUESTS AND MEMBERS)
# -------------------------------------------------------------------
class BookingCreateView(APIView):
    """
    Public API
    Admits a tee-time booking; signed-in members get the longer window
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = BookingCreateSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)

        result = admit_booking(
            serializer.to_booking_request(),
            request.user,
            timezone.now(),
        )

        return booking_response(
            result,
            "Booking created successfully",
            status.HTTP_201_CREATED,
            payment_required=bool(result.booking and result.booking.total_amount > 0),
        )


# -------------------------------------------------------------------
# MY BOOKINGS (UPCOMING)
# -------------------------------------------------------------------
class MyBookingsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        bookings = Booking.objects.filter(
            user=request.user,
            booking_date__gte=timezone.localdate(),
        ).order_by("booking_date", "tee_time")

        return Response({
            "status": "success",
            "data": BookingSerializer(bookings, many=True).data,
        })


# -------------------------------------------------------------------
# ALL BOOKINGS (ADMIN)
# -------------------------------------------------------------------
class AllBookingsView(APIView):
    permission_classes = [IsClubAdmin]

    def get(self, request):
        query = BookingListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        bookings = Booking.objects.select_related("user").order_by("booking_date", "tee_time")

        selected_date = query.validated_data.get("date")
        if selected_date:
            bookings = bookings.filter(booking_date=selected_date)
        else:
            bookings = bookings.filter(booking_date__gte=timezone.localdate())

        paginator = PageNumberPagination()
        page = paginator.paginate_queryset(bookings, request, view=self)
        return paginator.get_paginated_response(BookingSerializer(page, many=True).data)


# -------------------------------------------------------------------
# SINGLE BOOKING: READ / UPDATE / CANCEL
# -------------------------------------------------------------------
class BookingDetailView(APIView):
    """
    GET    - owner, admin, or anyone for guest bookings
    PATCH  - owner/admin, outside the notice window
    DELETE - soft cancel, owner/admin, outside the notice window
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request, booking_id):
        booking = store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFound()

        if not can_view(request.user, booking):
            raise NotAuthorized("Not authorized to view this booking")

        return Response({
            "status": "success",
            "data": BookingSerializer(booking).data,
        })

    def patch(self, request, booking_id):
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = update_booking(
            booking_id,
            request.user,
            serializer.validated_data,
            timezone.now(),
        )
        return booking_response(result, "Booking updated successfully")

    def delete(self, request, booking_id):
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = cancel_booking(
            booking_id,
            request.user,
            timezone.now(),
            reason=serializer.validated_data["cancellation_reason"],
        )
        return booking_response(result, "Booking cancelled successfully")


# -------------------------------------------------------------------
# STATUS CLOSE-OUT (ADMIN)
# -------------------------------------------------------------------
class BookingStatusView(APIView):
    permission_classes = [IsClubAdmin]

    def post(self, request, booking_id):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = mark_booking_status(
            booking_id,
            request.user,
            serializer.validated_data["status"],
            timezone.now(),
        )
        return booking_response(result, "Booking status updated")
