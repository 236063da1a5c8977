"""
Register syllabus models in the Django admin
CSM - Course Syllabus Manager
"""

from django.contrib import admin
from .models import Syllabus


@admin.register(Syllabus)
class SyllabusAdmin(admin.ModelAdmin):
    list_display = ['course', 'syllabus_type', 'access_type', 'display_name', 'source', 'is_preview', 'time_modified']
    list_filter = ['syllabus_type', 'access_type', 'is_preview']
    search_fields = ['display_name', 'course__course_code', 'course__course_name', 'url']
    autocomplete_fields = ['course', 'uploaded_by']
    readonly_fields = ['created_at', 'time_modified']

    def source(self, obj):
        return obj.url or obj.filename
    source.short_description = 'Source'
