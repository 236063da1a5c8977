"""
URL configuration for CSM project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Django Admin
    path('csm-admin/', admin.site.urls),

    # Authentication (login/logout)
    path('accounts/', include('django.contrib.auth.urls')),

    # Course Syllabus pages
    path('courses/<int:course_id>/syllabus/', include('apps.syllabus.urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Admin site customization
admin.site.site_header = "CSM Administration"
admin.site.site_title = "CSM Admin"
admin.site.index_title = "Course Syllabus Manager"
