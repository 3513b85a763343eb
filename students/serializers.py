"""
Serializers for students app
"""
from rest_framework import serializers
from .models import Student


class StudentBriefSerializer(serializers.ModelSerializer):
    """Compact student shape embedded in attendance responses."""
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)

    class Meta:
        model = Student
        fields = ['id', 'firstName', 'lastName']
