"""
URL Configuration for Syllabus App
CSM - Course Syllabus Manager

Mounted under courses/<int:course_id>/syllabus/
"""

from django.urls import path

from .views import SyllabusDownloadView, SyllabusIndexView

app_name = 'syllabus'

urlpatterns = [
    path('', SyllabusIndexView.as_view(), name='index'),
    path('download/<str:syllabus_type>/', SyllabusDownloadView.as_view(), name='download'),
]
