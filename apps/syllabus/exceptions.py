"""
Syllabus errors
CSM - Course Syllabus Manager

Each error carries the string-table key of the message shown to the user.
Capability failures use django.core.exceptions.PermissionDenied instead.
"""


class SyllabusError(Exception):
    message_key = 'err_syllabus_generic'

    def __init__(self, message=None, syllabus_type=None):
        self.syllabus_type = syllabus_type
        super().__init__(message or self.message_key)


class NoSuchSyllabus(SyllabusError):
    """The action names a syllabus type that has no record."""
    message_key = 'err_syllabus_notexist'


class AmbiguousConversion(SyllabusError):
    """Convert requested while both a public and a private syllabus exist."""
    message_key = 'err_syllabus_convert'


class InvalidSource(SyllabusError):
    """Neither a file nor a valid URL was supplied."""
    message_key = 'err_file_url_not_uploaded'


class DuplicateSyllabus(SyllabusError):
    """A second public syllabus was submitted as a new entry."""
    message_key = 'invalid_public_syllabus'


class SyllabusMismatch(SyllabusError):
    """The edited entry does not belong to this course."""
    message_key = 'err_syllabus_mismatch'


class InvalidAccess(SyllabusError):
    """The access level is not allowed for the syllabus type."""
    message_key = 'access_invalid'
