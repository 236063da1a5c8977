"""
Access mixins for the syllabus views
CSM - Course Syllabus Manager

Note:
    Anonymous users reach the syllabus page (public syllabi need no login),
    so these mixins resolve the course without requiring authentication and
    only management actions go through require_manage().
"""

from django.contrib.auth.mixins import AccessMixin
from django.shortcuts import get_object_or_404

from apps.courses.models import Course

from .services import SyllabusManager
from .selection import ViewerCapabilities
from .strings import STRINGS


class CourseSyllabusMixin(AccessMixin):
    """
    Resolves the course from the URL and sets up:
        self.course   - the Course (404 when missing or inactive)
        self.manager  - SyllabusManager for the course
        self.viewer   - ViewerCapabilities of request.user
    """
    permission_denied_message = STRINGS['err_cannot_manage']

    def dispatch(self, request, *args, **kwargs):
        self.course = get_object_or_404(Course, pk=kwargs['course_id'], is_active=True)
        self.manager = SyllabusManager(self.course)
        self.viewer = ViewerCapabilities.for_user(request.user, self.course)
        return super().dispatch(request, *args, **kwargs)

    def require_manage(self):
        """
        Returns None when the user may manage the syllabus, otherwise the
        login redirect for anonymous users. Raises PermissionDenied for
        authenticated users without the capability.
        """
        if self.viewer.can_manage:
            return None
        return self.handle_no_permission()
