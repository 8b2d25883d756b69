# slots/serializers.py
from rest_framework import serializers


class TeeSheetQuerySerializer(serializers.Serializer):
    # Past dates are allowed: the tee sheet is a display primitive
    date = serializers.DateField(input_formats=["%Y-%m-%d"])
