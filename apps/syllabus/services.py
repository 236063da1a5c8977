"""
Syllabus service layer
CSM - Course Syllabus Manager

=== Architecture ===
SyllabusManager: reads and writes the syllabus records of one course
- get_syllabi(): both slots of the course, empty slots as None
- save_syllabus(): insert-or-update keyed by (course, type)
- delete(): remove a slot and its stored file
- convert(): move a syllabus between the public and private slots

Stored files are removed by the receivers in signals.py, so deletes made
from the admin clean up the same way.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .exceptions import (
    AmbiguousConversion,
    DuplicateSyllabus,
    InvalidAccess,
    InvalidSource,
    NoSuchSyllabus,
    SyllabusMismatch,
)
from .models import (
    AccessType,
    DEFAULT_DISPLAY_NAME,
    Syllabus,
    SyllabusType,
)
from .permissions import can_manage_syllabus

logger = logging.getLogger('syllabus')


# Converting a syllabus moves it to the other slot. Unrestricting uses the
# stricter form of public (login required), never the open-world level.
CONVERSIONS = {
    SyllabusType.PUBLIC: (SyllabusType.PRIVATE, AccessType.PRIVATE),
    SyllabusType.PRIVATE: (SyllabusType.PUBLIC, AccessType.LOGGEDIN),
}


class SyllabusManager:
    """
    Fetches and stores the syllabus records for a single course.
    Every syllabus operation of the page goes through here.
    """

    def __init__(self, course):
        self.course = course

    def can_manage(self, user):
        return can_manage_syllabus(user, self.course)

    # ============================================================
    # 1) Reading
    # ============================================================

    def get_syllabi(self, for_update=False):
        """
        Returns:
            dict: {'public': Syllabus | None, 'private': Syllabus | None}
        """
        queryset = Syllabus.objects.for_course(self.course).select_related('course')
        if for_update:
            queryset = queryset.select_for_update()

        syllabi = {SyllabusType.PUBLIC.value: None, SyllabusType.PRIVATE.value: None}
        for syllabus in queryset:
            syllabi[syllabus.syllabus_type] = syllabus
        return syllabi

    def get_syllabus(self, syllabus_type):
        syllabus = self.get_syllabi().get(syllabus_type)
        if syllabus is None:
            raise NoSuchSyllabus(syllabus_type=syllabus_type)
        return syllabus

    # ============================================================
    # 2) Upload / save
    # ============================================================

    @transaction.atomic
    def save_syllabus(self, data, user=None):
        """
        Insert or update the syllabus of the submitted type.

        Args:
            data: cleaned form data with syllabus_type, display_name,
                source_file, source_url, access_type, is_preview and an
                optional entry_id when an existing syllabus is edited
            user: the uploader

        Returns:
            tuple: (Syllabus, created)
        """
        syllabus_type = data['syllabus_type']
        if syllabus_type not in CONVERSIONS:
            raise NoSuchSyllabus(syllabus_type=syllabus_type)

        existing = self.get_syllabi(for_update=True)[syllabus_type]
        entry_id = data.get('entry_id')

        if entry_id:
            if existing is None or existing.pk != int(entry_id):
                raise SyllabusMismatch(syllabus_type=syllabus_type)
            syllabus = existing
        elif existing is not None:
            # One active record per slot. A new public syllabus may not
            # silently replace the current one; private uploads update in place.
            if syllabus_type == SyllabusType.PUBLIC:
                raise DuplicateSyllabus(syllabus_type=syllabus_type)
            syllabus = existing
        else:
            syllabus = Syllabus(course=self.course, syllabus_type=syllabus_type)

        created = syllabus.pk is None
        self._apply_source(syllabus, data.get('source_file'), data.get('source_url'))

        if syllabus_type == SyllabusType.PRIVATE:
            syllabus.access_type = AccessType.PRIVATE
            syllabus.is_preview = False
        else:
            syllabus.access_type = data.get('access_type') or syllabus.access_type or AccessType.LOGGEDIN
            syllabus.is_preview = bool(data.get('is_preview'))

        syllabus.display_name = (data.get('display_name') or '').strip() or DEFAULT_DISPLAY_NAME
        if user is not None and user.is_authenticated:
            syllabus.uploaded_by = user

        self._validate(syllabus)
        syllabus.save()

        logger.info(
            f"Syllabus {'added' if created else 'updated'}: {syllabus.syllabus_type} "
            f"for course {self.course.course_code} (source={'file' if syllabus.is_file else 'url'})"
        )
        return syllabus, created

    @staticmethod
    def _validate(syllabus):
        """Model validation failures become syllabus errors the views can report."""
        try:
            syllabus.clean()
        except ValidationError as e:
            if hasattr(e, 'error_dict') and 'access_type' in e.error_dict:
                raise InvalidAccess(syllabus_type=syllabus.syllabus_type) from e
            raise InvalidSource(syllabus_type=syllabus.syllabus_type) from e

    @staticmethod
    def _apply_source(syllabus, source_file, source_url):
        """A submitted file wins over a URL; with neither, keep what is stored."""
        source_url = (source_url or '').strip()
        if source_file:
            syllabus.local_file = source_file
            syllabus.url = ''
        elif source_url:
            syllabus.url = source_url
            syllabus.local_file = ''
        elif not syllabus.local_file and not syllabus.url:
            raise InvalidSource(syllabus_type=syllabus.syllabus_type)

    # ============================================================
    # 3) Delete
    # ============================================================

    @transaction.atomic
    def delete(self, syllabus_type):
        syllabus = self.get_syllabi(for_update=True).get(syllabus_type)
        if syllabus is None:
            raise NoSuchSyllabus(syllabus_type=syllabus_type)
        self.delete_syllabus(syllabus)
        return syllabus

    def delete_syllabus(self, syllabus):
        pk = syllabus.pk
        syllabus.delete()
        logger.info(
            f"Syllabus deleted: {syllabus.syllabus_type} #{pk} "
            f"for course {self.course.course_code}"
        )

    # ============================================================
    # 4) Convert (restrict / unrestrict)
    # ============================================================

    @transaction.atomic
    def convert(self, syllabus_type):
        """
        Move the syllabus of the given type to the other slot.

        Returns:
            AccessType: the new access level

        Raises:
            NoSuchSyllabus: unknown type or empty slot
            AmbiguousConversion: both slots are filled
        """
        if syllabus_type not in CONVERSIONS:
            raise NoSuchSyllabus(syllabus_type=syllabus_type)

        syllabi = self.get_syllabi(for_update=True)
        if all(syllabi.values()):
            raise AmbiguousConversion(syllabus_type=syllabus_type)

        syllabus = syllabi.get(syllabus_type)
        if syllabus is None:
            raise NoSuchSyllabus(syllabus_type=syllabus_type)

        _, access_type = CONVERSIONS[syllabus_type]
        self.convert_syllabus(syllabus, access_type)
        return access_type

    def convert_syllabus(self, syllabus, access_type):
        old_type = syllabus.syllabus_type
        if access_type == AccessType.PRIVATE:
            syllabus.syllabus_type = SyllabusType.PRIVATE
            syllabus.is_preview = False
        else:
            syllabus.syllabus_type = SyllabusType.PUBLIC
        syllabus.access_type = access_type
        syllabus.save(update_fields=['syllabus_type', 'access_type', 'is_preview', 'time_modified'])

        logger.info(
            f"Syllabus converted: {old_type} -> {syllabus.syllabus_type} "
            f"(access={AccessType(access_type).label}) for course {self.course.course_code}"
        )
        return syllabus
