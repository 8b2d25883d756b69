from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from TeeTimes.config import load_course_config
from slots.serializers import TeeSheetQuerySerializer
from slots.services import build_tee_sheet


class TeeSheetView(APIView):
    """
    Public API
    Tee times for a date with their availability
    """
    permission_classes = [AllowAny]

    def get(self, request):
        serializer = TeeSheetQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        data = build_tee_sheet(
            serializer.validated_data["date"],
            load_course_config(),
        )

        return Response(data)
