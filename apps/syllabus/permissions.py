"""
Syllabus capability checks
CSM - Course Syllabus Manager
"""

MANAGE_PERMISSION = 'syllabus.manage_syllabus'


def can_manage_syllabus(user, course):
    """
    Instructors of the course, superusers and holders of the
    manage_syllabus permission may add, edit and delete syllabi.
    """
    if user is None or not user.is_authenticated or not user.is_active:
        return False
    if user.is_superuser or user.has_perm(MANAGE_PERMISSION):
        return True
    return course.is_instructor(user)
