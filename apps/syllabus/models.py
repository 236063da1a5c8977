"""
Syllabus models
CSM - Course Syllabus Manager

=== Architecture ===
- SyllabusType: the two slots a course has (public / private)
- AccessType: visibility tier (general public / logged-in users / participants)
- Syllabus: one stored syllabus, either an uploaded PDF or an external URL

A course holds at most one Syllabus per SyllabusType. The private slot is
always AccessType.PRIVATE; the public slot is PUBLIC or LOGGEDIN.
"""

import mimetypes
import posixpath

from django.db import models
from django.db.models import Q
from django.conf import settings
from django.core.exceptions import ValidationError
from django.urls import reverse


class SyllabusType(models.TextChoices):
    PUBLIC = 'public', 'Syllabus'
    PRIVATE = 'private', 'Restricted syllabus'


class AccessType(models.IntegerChoices):
    PUBLIC = 1, 'General public (no login required)'
    LOGGEDIN = 2, 'Community (login required)'
    PRIVATE = 3, 'Enrolled participants only'


# Which access levels each slot may hold
ALLOWED_ACCESS = {
    SyllabusType.PUBLIC: (AccessType.PUBLIC, AccessType.LOGGEDIN),
    SyllabusType.PRIVATE: (AccessType.PRIVATE,),
}

DEFAULT_DISPLAY_NAME = 'Syllabus'


def syllabus_upload_to(instance, filename):
    return posixpath.join(
        settings.SYLLABUS_UPLOAD_DIR,
        str(instance.course_id),
        instance.syllabus_type,
        filename,
    )


class SyllabusQuerySet(models.QuerySet):

    def for_course(self, course):
        return self.filter(course=course)

    def public(self):
        return self.filter(syllabus_type=SyllabusType.PUBLIC)

    def private(self):
        return self.filter(syllabus_type=SyllabusType.PRIVATE)


class Syllabus(models.Model):
    course = models.ForeignKey(
        'courses.Course',
        on_delete=models.CASCADE,
        related_name='syllabi',
        verbose_name='Course'
    )
    syllabus_type = models.CharField(
        max_length=10,
        choices=SyllabusType.choices,
        verbose_name='Type'
    )
    access_type = models.PositiveSmallIntegerField(
        choices=AccessType.choices,
        verbose_name='Access'
    )
    display_name = models.CharField(
        max_length=255,
        default=DEFAULT_DISPLAY_NAME,
        verbose_name='Display name'
    )

    # === Source: exactly one of file / URL ===
    local_file = models.FileField(
        upload_to=syllabus_upload_to,
        max_length=500,
        blank=True,
        verbose_name='File'
    )
    url = models.URLField(
        max_length=1000,
        blank=True,
        verbose_name='URL'
    )

    is_preview = models.BooleanField(
        default=False,
        verbose_name='Preview',
        help_text='This is not a complete version of the syllabus.'
    )
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_syllabi',
        verbose_name='Uploaded by'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    time_modified = models.DateTimeField(
        auto_now=True,
        verbose_name='Last modified'
    )

    objects = SyllabusQuerySet.as_manager()

    class Meta:
        db_table = 'syllabi'
        verbose_name = 'Syllabus'
        verbose_name_plural = 'Syllabi'
        ordering = ['course', 'syllabus_type']
        permissions = [
            ('manage_syllabus', 'Can add, edit, and delete the syllabus of a course'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['course', 'syllabus_type'],
                name='uniq_syllabus_course_type',
            ),
            models.CheckConstraint(
                condition=(
                    Q(syllabus_type=SyllabusType.PRIVATE, access_type=AccessType.PRIVATE)
                    | Q(
                        syllabus_type=SyllabusType.PUBLIC,
                        access_type__in=[AccessType.PUBLIC, AccessType.LOGGEDIN],
                    )
                ),
                name='chk_syllabus_access_matches_type',
            ),
            models.CheckConstraint(
                condition=(
                    (Q(local_file='') & ~Q(url=''))
                    | (~Q(local_file='') & Q(url=''))
                ),
                name='chk_syllabus_single_source',
            ),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.get_syllabus_type_display()}) - {self.course.course_code}"

    def clean(self):
        allowed = ALLOWED_ACCESS.get(self.syllabus_type, ())
        if self.access_type not in allowed:
            raise ValidationError({'access_type': 'Invalid access type selected'})
        if bool(self.local_file) == bool(self.url):
            raise ValidationError('Please upload a file or add a valid URL for your syllabus.')

    # === Kind / source helpers ===

    @property
    def is_public(self):
        return self.syllabus_type == SyllabusType.PUBLIC

    @property
    def is_private(self):
        return self.syllabus_type == SyllabusType.PRIVATE

    @property
    def is_url(self):
        return bool(self.url)

    @property
    def is_file(self):
        return bool(self.local_file)

    @property
    def filename(self):
        if not self.local_file:
            return ''
        return posixpath.basename(self.local_file.name)

    def get_file_url(self):
        """Storage URL of the uploaded file, or '' for URL syllabi."""
        if not self.local_file:
            return ''
        return self.local_file.url

    def get_mimetype(self):
        if self.url:
            return 'text/html'
        content_type, _ = mimetypes.guess_type(self.local_file.name)
        return content_type or 'application/octet-stream'

    def get_display_url(self):
        """
        What the page embeds: the external URL, or the stored file served
        inline through the download view so visibility is checked again.
        """
        if self.url:
            return self.url
        return f"{self.get_download_url()}?inline=1"

    def get_download_url(self):
        return reverse(
            'syllabus:download',
            kwargs={'course_id': self.course_id, 'syllabus_type': self.syllabus_type},
        )

    def get_absolute_url(self):
        return reverse('syllabus:index', kwargs={'course_id': self.course_id})
