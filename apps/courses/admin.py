"""
Register course models in the Django admin
CSM - Course Syllabus Manager
"""

from django.contrib import admin
from .models import Course, InstructorCourse, Enrollment


class InstructorCourseInline(admin.TabularInline):
    model = InstructorCourse
    extra = 0
    autocomplete_fields = ['instructor']


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    autocomplete_fields = ['student']


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['course_code', 'course_name', 'is_active', 'students_count', 'created_at']
    list_filter = ['is_active']
    search_fields = ['course_code', 'course_name']
    inlines = [InstructorCourseInline, EnrollmentInline]

    def students_count(self, obj):
        return obj.enrollments.filter(is_active=True).count()
    students_count.short_description = 'Students'


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['student', 'course', 'is_active', 'enrolled_at']
    list_filter = ['is_active', 'course']
    search_fields = ['student__username', 'course__course_code']
    autocomplete_fields = ['student', 'course']
