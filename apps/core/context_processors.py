"""
Context processors for global template variables
CSM - Course Syllabus Manager
"""

from django.conf import settings


def site_settings(request):
    """
    Add site settings to templates
    """
    return {
        'SITE_NAME': 'CSM',
        'SITE_FULL_NAME': 'Course Syllabus Manager',
        'SITE_VERSION': '1.0.0',
        'DEBUG': settings.DEBUG,
    }
