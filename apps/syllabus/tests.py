"""
Tests for the course syllabus page
CSM - Course Syllabus Manager

Covers:
1. Selection: which syllabus each kind of viewer gets (or why none)
2. Services: save / delete / convert through SyllabusManager
3. Forms: source rules, access rules, PDF validation
4. Signals: stored files removed on delete and on replacement
5. Views: display, editing mode, manage actions, download
"""

import shutil
import tempfile
from unittest import mock

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from apps.core.models import AuditLog
from apps.courses.models import Course, Enrollment, InstructorCourse
from apps.syllabus.exceptions import (
    AmbiguousConversion,
    DuplicateSyllabus,
    InvalidAccess,
    InvalidSource,
    NoSuchSyllabus,
    SyllabusMismatch,
)
from apps.syllabus.forms import SyllabusForm
from apps.syllabus.models import AccessType, Syllabus, SyllabusType
from apps.syllabus.permissions import can_manage_syllabus
from apps.syllabus.selection import (
    NotViewableReason,
    ViewerCapabilities,
    select_for_display,
)
from apps.syllabus.services import SyllabusManager
from apps.syllabus.strings import get_string
from apps.syllabus.views import EDITING_SESSION_KEY

User = get_user_model()

TEMP_MEDIA_ROOT = tempfile.mkdtemp(prefix='csm-test-media-')

PDF_OPEN = 'apps.syllabus.validators.pdfplumber.open'


def pdf_upload(name='syllabus.pdf', content=b'%PDF-1.4 test syllabus'):
    return SimpleUploadedFile(name, content, content_type='application/pdf')


def as_pdf(mock_open, pages=1):
    """Make the patched pdfplumber.open report a PDF with the given page count."""
    mock_open.return_value.__enter__.return_value.pages = [object()] * pages
    return mock_open


def upload_data(**overrides):
    data = {
        'syllabus_type': SyllabusType.PUBLIC,
        'entry_id': None,
        'display_name': 'Course syllabus',
        'source_file': None,
        'source_url': '',
        'access_type': AccessType.LOGGEDIN,
        'is_preview': False,
    }
    data.update(overrides)
    return data


# ============================================================================
# Shared fixtures
# ============================================================================

@override_settings(MEDIA_ROOT=TEMP_MEDIA_ROOT)
class SyllabusTestBase(TestCase):
    """Base class with a course, its instructor, an enrolled student and an outsider"""

    @classmethod
    def setUpTestData(cls):
        cls.course = Course.objects.create(course_code='CS101', course_name='Intro to Computing')
        cls.other_course = Course.objects.create(course_code='CS202', course_name='Data Structures')

        cls.instructor = User.objects.create_user(username='instructor', password='TestPass123!')
        cls.student = User.objects.create_user(username='student', password='TestPass123!')
        cls.outsider = User.objects.create_user(username='outsider', password='TestPass123!')

        InstructorCourse.objects.create(instructor=cls.instructor, course=cls.course)
        Enrollment.objects.create(student=cls.student, course=cls.course)

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(TEMP_MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        self.manager = SyllabusManager(self.course)

    def create_url_syllabus(self, syllabus_type=SyllabusType.PUBLIC, access_type=AccessType.LOGGEDIN,
                            course=None, **kwargs):
        return Syllabus.objects.create(
            course=course or self.course,
            syllabus_type=syllabus_type,
            access_type=access_type,
            url=kwargs.pop('url', 'https://example.com/syllabus'),
            **kwargs
        )

    def create_file_syllabus(self, syllabus_type=SyllabusType.PUBLIC, access_type=AccessType.LOGGEDIN, **kwargs):
        return Syllabus.objects.create(
            course=self.course,
            syllabus_type=syllabus_type,
            access_type=access_type,
            local_file=kwargs.pop('local_file', pdf_upload()),
            **kwargs
        )

    def index_url(self, course=None):
        return reverse('syllabus:index', kwargs={'course_id': (course or self.course).pk})


# ============================================================================
# 1. Selection
# ============================================================================

class SelectionTest(SimpleTestCase):
    """Selection rules over every combination of records and viewers"""

    def setUp(self):
        self.public_world = Syllabus(syllabus_type=SyllabusType.PUBLIC, access_type=AccessType.PUBLIC)
        self.public_loggedin = Syllabus(syllabus_type=SyllabusType.PUBLIC, access_type=AccessType.LOGGEDIN)
        self.private = Syllabus(syllabus_type=SyllabusType.PRIVATE, access_type=AccessType.PRIVATE)

        self.anonymous = ViewerCapabilities()
        self.member = ViewerCapabilities(is_authenticated=True)
        self.participant = ViewerCapabilities(is_authenticated=True, is_participant=True)
        self.course_manager = ViewerCapabilities(is_authenticated=True, can_manage=True)

    def test_selection_matrix(self):
        """Every record set against every viewer picks the expected result."""
        none_uploaded = NotViewableReason.NONE_UPLOADED
        requires_login = NotViewableReason.REQUIRES_LOGIN
        requires_enrollment = NotViewableReason.REQUIRES_ENROLLMENT

        record_sets = {
            'none': {'public': None, 'private': None},
            'public_world': {'public': self.public_world, 'private': None},
            'public_loggedin': {'public': self.public_loggedin, 'private': None},
            'private_only': {'public': None, 'private': self.private},
            'both': {'public': self.public_loggedin, 'private': self.private},
        }
        expected = {
            ('none', 'anonymous'): none_uploaded,
            ('none', 'member'): none_uploaded,
            ('none', 'participant'): none_uploaded,
            ('public_world', 'anonymous'): self.public_world,
            ('public_world', 'member'): self.public_world,
            ('public_world', 'participant'): self.public_world,
            ('public_loggedin', 'anonymous'): requires_login,
            ('public_loggedin', 'member'): self.public_loggedin,
            ('public_loggedin', 'participant'): self.public_loggedin,
            ('private_only', 'anonymous'): requires_enrollment,
            ('private_only', 'member'): requires_enrollment,
            ('private_only', 'participant'): self.private,
            ('both', 'anonymous'): requires_login,
            ('both', 'member'): self.public_loggedin,
            ('both', 'participant'): self.private,
        }
        viewers = {
            'anonymous': self.anonymous,
            'member': self.member,
            'participant': self.participant,
        }

        for (records_name, viewer_name), outcome in expected.items():
            with self.subTest(records=records_name, viewer=viewer_name):
                choice = select_for_display(record_sets[records_name], viewers[viewer_name])
                if isinstance(outcome, NotViewableReason):
                    self.assertFalse(choice.is_visible)
                    self.assertIs(choice.reason, outcome)
                else:
                    self.assertTrue(choice.is_visible)
                    self.assertIs(choice.syllabus, outcome)
                    self.assertIsNone(choice.reason)

    def test_manager_sees_private(self):
        """Managers who are not participants still see the private syllabus."""
        choice = select_for_display({'public': self.public_world, 'private': self.private}, self.course_manager)
        self.assertIs(choice.syllabus, self.private)

    def test_missing_keys_are_empty_slots(self):
        choice = select_for_display({}, self.participant)
        self.assertIs(choice.reason, NotViewableReason.NONE_UPLOADED)

    def test_can_view_levels(self):
        self.assertTrue(self.anonymous.can_view(AccessType.PUBLIC))
        self.assertFalse(self.anonymous.can_view(AccessType.LOGGEDIN))
        self.assertTrue(self.member.can_view(AccessType.LOGGEDIN))
        self.assertFalse(self.member.can_view(AccessType.PRIVATE))
        self.assertTrue(self.participant.can_view(AccessType.PRIVATE))
        self.assertFalse(self.participant.can_view(99))

    def test_reason_message_keys_exist(self):
        for reason in NotViewableReason:
            with self.subTest(reason=reason):
                self.assertTrue(get_string(reason.message_key))


class ViewerCapabilitiesTest(SyllabusTestBase):
    """ViewerCapabilities.for_user against real users"""

    def test_anonymous(self):
        from django.contrib.auth.models import AnonymousUser
        viewer = ViewerCapabilities.for_user(AnonymousUser(), self.course)
        self.assertEqual(viewer, ViewerCapabilities())

    def test_enrolled_student(self):
        viewer = ViewerCapabilities.for_user(self.student, self.course)
        self.assertTrue(viewer.is_participant)
        self.assertFalse(viewer.can_manage)

    def test_inactive_enrolment_is_not_participant(self):
        Enrollment.objects.filter(student=self.student).update(is_active=False)
        viewer = ViewerCapabilities.for_user(self.student, self.course)
        self.assertFalse(viewer.is_participant)

    def test_instructor(self):
        viewer = ViewerCapabilities.for_user(self.instructor, self.course)
        self.assertTrue(viewer.is_participant)
        self.assertTrue(viewer.can_manage)

    def test_instructor_of_other_course(self):
        viewer = ViewerCapabilities.for_user(self.instructor, self.other_course)
        self.assertFalse(viewer.is_participant)
        self.assertFalse(viewer.can_manage)


class PermissionTest(SyllabusTestBase):
    """Who may manage the syllabus of a course"""

    def test_superuser_manages(self):
        admin_user = User.objects.create_superuser(username='admin', password='TestPass123!')
        self.assertTrue(can_manage_syllabus(admin_user, self.course))

    def test_permission_holder_manages(self):
        self.outsider.user_permissions.add(Permission.objects.get(codename='manage_syllabus'))
        outsider = User.objects.get(pk=self.outsider.pk)
        self.assertTrue(can_manage_syllabus(outsider, self.course))

    def test_student_does_not_manage(self):
        self.assertFalse(can_manage_syllabus(self.student, self.course))

    def test_inactive_instructor_does_not_manage(self):
        self.instructor.is_active = False
        self.assertFalse(can_manage_syllabus(self.instructor, self.course))


# ============================================================================
# 2. Services
# ============================================================================

class SyllabusSaveTest(SyllabusTestBase):
    """SyllabusManager.save_syllabus"""

    def test_add_url_syllabus(self):
        syllabus, created = self.manager.save_syllabus(
            upload_data(source_url='https://example.com/cs101'), user=self.instructor
        )
        self.assertTrue(created)
        self.assertTrue(syllabus.is_url)
        self.assertEqual(syllabus.access_type, AccessType.LOGGEDIN)
        self.assertEqual(syllabus.uploaded_by, self.instructor)
        self.assertEqual(syllabus.get_mimetype(), 'text/html')

    def test_file_wins_over_url(self):
        """Both sources submitted: the file is stored and the URL dropped."""
        syllabus, _ = self.manager.save_syllabus(
            upload_data(source_file=pdf_upload(), source_url='https://example.com/cs101')
        )
        self.assertTrue(syllabus.is_file)
        self.assertEqual(syllabus.url, '')
        self.assertEqual(syllabus.get_mimetype(), 'application/pdf')
        self.assertTrue(syllabus.local_file.name.startswith(f'syllabi/{self.course.pk}/public/'))

    def test_no_source_is_invalid(self):
        with self.assertRaises(InvalidSource):
            self.manager.save_syllabus(upload_data())
        self.assertFalse(Syllabus.objects.exists())

    def test_second_public_is_duplicate(self):
        self.create_url_syllabus()
        with self.assertRaises(DuplicateSyllabus):
            self.manager.save_syllabus(upload_data(source_url='https://example.com/other'))

    def test_private_upload_updates_in_place(self):
        existing = self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        syllabus, created = self.manager.save_syllabus(upload_data(
            syllabus_type=SyllabusType.PRIVATE,
            source_url='https://example.com/new',
            access_type=AccessType.PUBLIC,
            is_preview=True,
        ))
        self.assertFalse(created)
        self.assertEqual(syllabus.pk, existing.pk)
        self.assertEqual(syllabus.url, 'https://example.com/new')
        self.assertEqual(syllabus.access_type, AccessType.PRIVATE)
        self.assertFalse(syllabus.is_preview)

    def test_edit_keeps_stored_source(self):
        existing = self.create_url_syllabus()
        syllabus, created = self.manager.save_syllabus(upload_data(
            entry_id=existing.pk, display_name='Renamed', access_type=AccessType.PUBLIC
        ))
        self.assertFalse(created)
        self.assertEqual(syllabus.url, 'https://example.com/syllabus')
        self.assertEqual(syllabus.display_name, 'Renamed')
        self.assertEqual(syllabus.access_type, AccessType.PUBLIC)

    def test_edit_other_course_entry_is_mismatch(self):
        foreign = self.create_url_syllabus(course=self.other_course)
        with self.assertRaises(SyllabusMismatch):
            self.manager.save_syllabus(upload_data(
                entry_id=foreign.pk, source_url='https://example.com/x'
            ))

    def test_blank_display_name_uses_default(self):
        syllabus, _ = self.manager.save_syllabus(
            upload_data(display_name='  ', source_url='https://example.com/x')
        )
        self.assertEqual(syllabus.display_name, 'Syllabus')

    def test_access_not_allowed_for_type(self):
        """A public syllabus cannot be saved with the participants-only level."""
        with self.assertRaises(InvalidAccess):
            self.manager.save_syllabus(upload_data(
                source_url='https://example.com/x', access_type=AccessType.PRIVATE
            ))
        self.assertFalse(Syllabus.objects.exists())


class SyllabusDeleteTest(SyllabusTestBase):
    """SyllabusManager.delete"""

    def test_delete_missing_kind(self):
        with self.assertRaises(NoSuchSyllabus):
            self.manager.delete(SyllabusType.PUBLIC)

    def test_delete_removes_record_from_selection(self):
        self.create_url_syllabus(access_type=AccessType.PUBLIC)
        self.manager.delete(SyllabusType.PUBLIC)

        self.assertFalse(Syllabus.objects.filter(course=self.course).exists())
        choice = select_for_display(self.manager.get_syllabi(), ViewerCapabilities())
        self.assertIs(choice.reason, NotViewableReason.NONE_UPLOADED)

    def test_delete_leaves_other_kind(self):
        self.create_url_syllabus()
        private = self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.manager.delete(SyllabusType.PUBLIC)
        self.assertEqual(self.manager.get_syllabus(SyllabusType.PRIVATE), private)


class SyllabusConvertTest(SyllabusTestBase):
    """SyllabusManager.convert"""

    def test_round_trip_lands_on_loggedin(self):
        """Public(world) -> private -> public comes back as login-required."""
        self.create_url_syllabus(access_type=AccessType.PUBLIC)

        access = self.manager.convert(SyllabusType.PUBLIC)
        self.assertEqual(access, AccessType.PRIVATE)
        private = self.manager.get_syllabus(SyllabusType.PRIVATE)
        self.assertEqual(private.access_type, AccessType.PRIVATE)
        self.assertIsNone(self.manager.get_syllabi()[SyllabusType.PUBLIC])

        access = self.manager.convert(SyllabusType.PRIVATE)
        self.assertEqual(access, AccessType.LOGGEDIN)
        public = self.manager.get_syllabus(SyllabusType.PUBLIC)
        self.assertEqual(public.access_type, AccessType.LOGGEDIN)

    def test_restrict_clears_preview(self):
        self.create_url_syllabus(is_preview=True)
        self.manager.convert(SyllabusType.PUBLIC)
        self.assertFalse(self.manager.get_syllabus(SyllabusType.PRIVATE).is_preview)

    def test_both_present_is_ambiguous(self):
        self.create_url_syllabus()
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        for syllabus_type in (SyllabusType.PUBLIC, SyllabusType.PRIVATE):
            with self.subTest(syllabus_type=syllabus_type):
                with self.assertRaises(AmbiguousConversion):
                    self.manager.convert(syllabus_type)

    def test_convert_empty_slot(self):
        with self.assertRaises(NoSuchSyllabus):
            self.manager.convert(SyllabusType.PRIVATE)

    def test_convert_unknown_type(self):
        with self.assertRaises(NoSuchSyllabus):
            self.manager.convert('draft')


# ============================================================================
# 3. Forms
# ============================================================================

@mock.patch(PDF_OPEN)
class SyllabusFormTest(SyllabusTestBase):
    """SyllabusForm validation"""

    def build_form(self, data, files=None):
        return SyllabusForm(data, files or {}, manager=self.manager)

    def test_url_only_is_valid(self, mock_open):
        form = self.build_form({
            'syllabus_type': 'public', 'display_name': 'Syllabus',
            'source_url': 'https://example.com/s', 'access_type': '2',
        })
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['access_type'], AccessType.LOGGEDIN)
        mock_open.assert_not_called()

    def test_file_clears_url(self, mock_open):
        as_pdf(mock_open)
        form = self.build_form(
            {'syllabus_type': 'public', 'display_name': 'Syllabus',
             'source_url': 'https://example.com/s', 'access_type': '1'},
            {'source_file': pdf_upload()},
        )
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['source_url'], '')
        self.assertIsNotNone(form.cleaned_data['source_file'])

    def test_no_source(self, mock_open):
        form = self.build_form({'syllabus_type': 'public', 'display_name': 'Syllabus', 'access_type': '1'})
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('err_file_url_not_uploaded'), form.non_field_errors())

    def test_public_requires_access(self, mock_open):
        form = self.build_form({
            'syllabus_type': 'public', 'display_name': 'Syllabus', 'source_url': 'https://example.com/s',
        })
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('access_none_selected'), form.errors['access_type'])

    def test_private_access_forced(self, mock_open):
        form = self.build_form({
            'syllabus_type': 'private', 'display_name': 'Syllabus',
            'source_url': 'https://example.com/s', 'is_preview': 'on',
        })
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['access_type'], AccessType.PRIVATE)
        self.assertFalse(form.cleaned_data['is_preview'])

    def test_private_access_level_not_offered(self, mock_open):
        form = self.build_form({
            'syllabus_type': 'public', 'display_name': 'Syllabus',
            'source_url': 'https://example.com/s', 'access_type': '3',
        })
        self.assertFalse(form.is_valid())
        self.assertIn('access_type', form.errors)

    def test_duplicate_public(self, mock_open):
        self.create_url_syllabus()
        form = self.build_form({
            'syllabus_type': 'public', 'display_name': 'Syllabus',
            'source_url': 'https://example.com/s', 'access_type': '1',
        })
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('invalid_public_syllabus'), form.non_field_errors())

    def test_entry_mismatch(self, mock_open):
        foreign = self.create_url_syllabus(course=self.other_course)
        form = self.build_form({
            'syllabus_type': 'public', 'entry_id': str(foreign.pk), 'display_name': 'Syllabus',
            'source_url': 'https://example.com/s', 'access_type': '1',
        })
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('err_syllabus_mismatch'), form.non_field_errors())

    def test_edit_without_new_source(self, mock_open):
        existing = self.create_url_syllabus()
        form = self.build_form({
            'syllabus_type': 'public', 'entry_id': str(existing.pk),
            'display_name': 'Renamed', 'access_type': '2',
        })
        self.assertTrue(form.is_valid(), form.errors)

    def test_edit_form_initial(self, mock_open):
        existing = self.create_url_syllabus(is_preview=True)
        form = SyllabusForm(manager=self.manager, instance=existing)
        self.assertEqual(form.initial['entry_id'], existing.pk)
        self.assertEqual(form.initial['syllabus_type'], 'public')
        self.assertEqual(form.initial['source_url'], existing.url)
        self.assertTrue(form.initial['is_preview'])

    def test_non_pdf_rejected(self, mock_open):
        mock_open.side_effect = ValueError('No /Root object! - Is this really a PDF?')
        form = self.build_form(
            {'syllabus_type': 'public', 'display_name': 'Syllabus', 'access_type': '1'},
            {'source_file': pdf_upload(content=b'not a pdf')},
        )
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('err_file_not_pdf'), form.errors['source_file'])

    def test_empty_pdf_rejected(self, mock_open):
        as_pdf(mock_open, pages=0)
        form = self.build_form(
            {'syllabus_type': 'public', 'display_name': 'Syllabus', 'access_type': '1'},
            {'source_file': pdf_upload()},
        )
        self.assertFalse(form.is_valid())
        self.assertIn('source_file', form.errors)

    def test_wrong_extension_rejected(self, mock_open):
        form = self.build_form(
            {'syllabus_type': 'public', 'display_name': 'Syllabus', 'access_type': '1'},
            {'source_file': SimpleUploadedFile('syllabus.docx', b'data')},
        )
        self.assertFalse(form.is_valid())
        self.assertIn('source_file', form.errors)
        mock_open.assert_not_called()

    @override_settings(SYLLABUS_MAX_UPLOAD_SIZE=10)
    def test_file_too_large(self, mock_open):
        form = self.build_form(
            {'syllabus_type': 'public', 'display_name': 'Syllabus', 'access_type': '1'},
            {'source_file': pdf_upload(content=b'%PDF-1.4' + b'0' * 64)},
        )
        self.assertFalse(form.is_valid())
        self.assertIn('source_file', form.errors)

    def test_display_name_required(self, mock_open):
        form = self.build_form({
            'syllabus_type': 'public', 'source_url': 'https://example.com/s', 'access_type': '1',
        })
        self.assertFalse(form.is_valid())
        self.assertIn(get_string('display_name_none_entered'), form.errors['display_name'])


# ============================================================================
# 4. Signals
# ============================================================================

class StoredFileCleanupTest(SyllabusTestBase):
    """Stored PDFs are removed once the change commits"""

    def test_delete_removes_file(self):
        syllabus = self.create_file_syllabus()
        storage, name = syllabus.local_file.storage, syllabus.local_file.name
        self.assertTrue(storage.exists(name))

        with self.captureOnCommitCallbacks(execute=True):
            self.manager.delete(SyllabusType.PUBLIC)
        self.assertFalse(storage.exists(name))

    def test_url_replacing_file_removes_file(self):
        syllabus = self.create_file_syllabus()
        storage, name = syllabus.local_file.storage, syllabus.local_file.name

        with self.captureOnCommitCallbacks(execute=True):
            self.manager.save_syllabus(upload_data(
                entry_id=syllabus.pk, source_url='https://example.com/new'
            ))
        self.assertFalse(storage.exists(name))
        syllabus.refresh_from_db()
        self.assertTrue(syllabus.is_url)

    def test_new_file_replaces_old_file(self):
        syllabus = self.create_file_syllabus(local_file=pdf_upload('old.pdf'))
        storage, old_name = syllabus.local_file.storage, syllabus.local_file.name

        with self.captureOnCommitCallbacks(execute=True):
            updated, _ = self.manager.save_syllabus(upload_data(
                entry_id=syllabus.pk, source_file=pdf_upload('new.pdf')
            ))
        self.assertFalse(storage.exists(old_name))
        self.assertTrue(storage.exists(updated.local_file.name))

    def test_metadata_edit_keeps_file(self):
        syllabus = self.create_file_syllabus()
        storage, name = syllabus.local_file.storage, syllabus.local_file.name

        with self.captureOnCommitCallbacks(execute=True):
            self.manager.save_syllabus(upload_data(entry_id=syllabus.pk, display_name='Renamed'))
        self.assertTrue(storage.exists(name))


# ============================================================================
# 5. Views
# ============================================================================

class SyllabusDisplayViewTest(SyllabusTestBase):
    """GET on the syllabus page"""

    def test_unknown_course_404(self):
        response = self.client.get(reverse('syllabus:index', kwargs={'course_id': 9999}))
        self.assertEqual(response.status_code, 404)

    def test_inactive_course_404(self):
        Course.objects.filter(pk=self.other_course.pk).update(is_active=False)
        response = self.client.get(self.index_url(self.other_course))
        self.assertEqual(response.status_code, 404)

    def test_anonymous_sees_world_syllabus(self):
        self.create_url_syllabus(access_type=AccessType.PUBLIC, display_name='Open syllabus')
        response = self.client.get(self.index_url())
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'syllabus/index.html')
        self.assertContains(response, 'Open syllabus')
        self.assertContains(response, 'https://example.com/syllabus')

    def test_anonymous_blocked_from_loggedin_syllabus(self):
        self.create_url_syllabus(access_type=AccessType.LOGGEDIN, display_name='Community syllabus')
        response = self.client.get(self.index_url())
        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, 'Community syllabus')
        self.assertContains(response, get_string('cannot_view_public_syllabus'))

    def test_outsider_blocked_from_private_syllabus(self):
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.outsider)
        response = self.client.get(self.index_url())
        self.assertContains(response, get_string('cannot_view_private_syllabus'))

    def test_student_sees_restricted_title(self):
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE, display_name='Full syllabus')
        self.client.force_login(self.student)
        response = self.client.get(self.index_url())
        self.assertEqual(response.context['title'], 'Full syllabus (restricted)*')
        self.assertContains(response, get_string('private_disclaimer'))

    def test_preview_title(self):
        self.create_url_syllabus(access_type=AccessType.PUBLIC, display_name='Draft', is_preview=True)
        response = self.client.get(self.index_url())
        self.assertEqual(response.context['title'], 'Draft (preview)*')
        self.assertContains(response, get_string('preview_disclaimer'))

    def test_pdf_embedded_through_download_view(self):
        syllabus = self.create_file_syllabus(access_type=AccessType.PUBLIC)
        response = self.client.get(self.index_url())
        self.assertTrue(response.context['is_pdf'])
        self.assertEqual(response.context['embed_url'], f'{syllabus.get_download_url()}?inline=1')
        self.assertContains(response, get_string('clicktodownload', name=syllabus.filename))

    def test_nothing_uploaded(self):
        response = self.client.get(self.index_url())
        self.assertEqual(response.context['title'], 'Syllabus')
        self.assertContains(response, get_string('no_syllabus_uploaded'))
        self.assertFalse(response.context['show_upload_help'])

    def test_manager_gets_upload_hint(self):
        self.client.force_login(self.instructor)
        response = self.client.get(self.index_url())
        self.assertTrue(response.context['show_upload_help'])

    def test_view_is_audited(self):
        syllabus = self.create_url_syllabus(access_type=AccessType.PUBLIC)
        self.client.get(self.index_url())
        log = AuditLog.objects.get(action='view')
        self.assertIsNone(log.user)
        self.assertEqual(log.object_id, syllabus.pk)


class EditingModeTest(SyllabusTestBase):
    """Turning editing on and off"""

    def test_manager_turns_editing_on(self):
        self.client.force_login(self.instructor)
        response = self.client.get(self.index_url(), {'edit': 'on'})
        self.assertRedirects(response, self.index_url())
        self.assertTrue(self.client.session[EDITING_SESSION_KEY])

        response = self.client.get(self.index_url())
        self.assertTemplateUsed(response, 'syllabus/manage.html')
        self.assertIsNone(response.context['form'])

    def test_manager_turns_editing_off(self):
        self.client.force_login(self.instructor)
        self.client.get(self.index_url(), {'edit': 'on'})
        self.client.get(self.index_url(), {'edit': 'off'})
        response = self.client.get(self.index_url())
        self.assertTemplateUsed(response, 'syllabus/index.html')

    def test_student_cannot_turn_editing_on(self):
        self.client.force_login(self.student)
        response = self.client.get(self.index_url(), {'edit': 'on'})
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'syllabus/index.html')
        self.assertNotIn(EDITING_SESSION_KEY, self.client.session)

    def test_add_form(self):
        self.client.force_login(self.instructor)
        self.client.get(self.index_url(), {'edit': 'on'})
        response = self.client.get(self.index_url(), {'action': 'add', 'type': 'private'})
        form = response.context['form']
        self.assertIsInstance(form, SyllabusForm)
        self.assertEqual(form.initial['syllabus_type'], 'private')

    def test_edit_form(self):
        syllabus = self.create_url_syllabus()
        self.client.force_login(self.instructor)
        self.client.get(self.index_url(), {'edit': 'on'})
        response = self.client.get(self.index_url(), {'action': 'edit', 'type': 'public'})
        self.assertEqual(response.context['form'].initial['entry_id'], syllabus.pk)

    def test_convert_hidden_when_both_exist(self):
        self.create_url_syllabus()
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.instructor)
        self.client.get(self.index_url(), {'edit': 'on'})
        response = self.client.get(self.index_url())
        self.assertFalse(response.context['can_convert'])

    def test_delete_confirmation_escaped_for_javascript(self):
        """Apostrophes in the confirmation text cannot end the JS string."""
        self.create_url_syllabus()
        self.client.force_login(self.instructor)
        self.client.get(self.index_url(), {'edit': 'on'})
        with mock.patch.dict('apps.syllabus.strings.STRINGS', {'confirm_deletion': "Don't you want to keep it?"}):
            response = self.client.get(self.index_url())
        self.assertContains(response, "confirm('Don\\u0027t you want to keep it?')")
        self.assertNotContains(response, "Don&#x27;t")


class SyllabusManageViewTest(SyllabusTestBase):
    """POST actions on the syllabus page"""

    def test_anonymous_post_redirects_to_login(self):
        response = self.client.post(self.index_url(), {'action': 'delete', 'type': 'public'})
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('login'), response['Location'])

    def test_student_post_forbidden(self):
        self.create_url_syllabus()
        self.client.force_login(self.student)
        response = self.client.post(self.index_url(), {'action': 'delete', 'type': 'public'})
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Syllabus.objects.filter(course=self.course).exists())

    def test_delete(self):
        self.create_url_syllabus()
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'action': 'delete', 'type': 'public'}, follow=True)
        self.assertRedirects(response, f'{self.index_url()}?action=view')
        self.assertContains(response, get_string('successful_delete'))
        self.assertFalse(Syllabus.objects.filter(course=self.course).exists())
        self.assertTrue(AuditLog.objects.filter(action='delete', user=self.instructor).exists())

    def test_delete_missing(self):
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'action': 'delete', 'type': 'private'}, follow=True)
        self.assertRedirects(response, self.index_url())
        self.assertContains(response, get_string('err_syllabus_notexist'))

    def test_restrict(self):
        self.create_url_syllabus(access_type=AccessType.PUBLIC)
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'action': 'convert', 'type': 'public'}, follow=True)
        self.assertContains(response, get_string('successful_restrict'))
        self.assertEqual(self.manager.get_syllabus('private').access_type, AccessType.PRIVATE)

    def test_unrestrict(self):
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'action': 'convert', 'type': 'private'}, follow=True)
        self.assertContains(response, get_string('successful_unrestrict'))
        self.assertEqual(self.manager.get_syllabus('public').access_type, AccessType.LOGGEDIN)

    def test_convert_ambiguous(self):
        self.create_url_syllabus()
        self.create_url_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'action': 'convert', 'type': 'public'}, follow=True)
        self.assertContains(response, get_string('err_syllabus_convert'))
        self.assertEqual(Syllabus.objects.get(course=self.course, syllabus_type='public').access_type,
                         AccessType.LOGGEDIN)

    def test_upload_url(self):
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {
            'syllabus_type': 'public', 'display_name': 'Course outline',
            'source_url': 'https://example.com/outline', 'access_type': '1',
        }, follow=True)
        self.assertContains(response, get_string('successful_add'))
        syllabus = self.manager.get_syllabus('public')
        self.assertEqual(syllabus.url, 'https://example.com/outline')
        self.assertEqual(syllabus.access_type, AccessType.PUBLIC)
        self.assertTrue(AuditLog.objects.filter(action='create', object_id=syllabus.pk).exists())

    @mock.patch(PDF_OPEN)
    def test_upload_file(self, mock_open):
        as_pdf(mock_open)
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {
            'syllabus_type': 'private', 'display_name': 'Full syllabus',
            'source_file': pdf_upload('cs101.pdf'),
        }, follow=True)
        self.assertContains(response, get_string('successful_add'))
        syllabus = self.manager.get_syllabus('private')
        self.assertTrue(syllabus.is_file)
        self.assertEqual(syllabus.access_type, AccessType.PRIVATE)

    def test_update(self):
        existing = self.create_url_syllabus()
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {
            'syllabus_type': 'public', 'entry_id': str(existing.pk),
            'display_name': 'Renamed', 'access_type': '2',
        }, follow=True)
        self.assertContains(response, get_string('successful_update'))
        existing.refresh_from_db()
        self.assertEqual(existing.display_name, 'Renamed')

    def test_invalid_upload_rerenders_form(self):
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {
            'syllabus_type': 'public', 'display_name': 'Course outline', 'access_type': '1',
        })
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'syllabus/manage.html')
        self.assertContains(response, get_string('err_file_url_not_uploaded'))
        self.assertFalse(Syllabus.objects.exists())

    def test_cancel_keeps_editing(self):
        self.client.force_login(self.instructor)
        response = self.client.post(self.index_url(), {'cancel': '1', 'syllabus_type': 'public'})
        self.assertRedirects(response, self.index_url(), fetch_redirect_response=False)
        self.assertTrue(self.client.session[EDITING_SESSION_KEY])
        self.assertFalse(Syllabus.objects.exists())


class SyllabusDownloadViewTest(SyllabusTestBase):
    """GET on the download endpoint"""

    def download_url(self, syllabus_type):
        return reverse('syllabus:download', kwargs={'course_id': self.course.pk, 'syllabus_type': syllabus_type})

    def test_missing_syllabus_404(self):
        response = self.client.get(self.download_url('public'))
        self.assertEqual(response.status_code, 404)

    def test_world_file_download(self):
        syllabus = self.create_file_syllabus(access_type=AccessType.PUBLIC)
        response = self.client.get(self.download_url('public'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response['Content-Disposition'].startswith('attachment'))
        self.assertEqual(b''.join(response.streaming_content), b'%PDF-1.4 test syllabus')
        response.close()
        self.assertTrue(AuditLog.objects.filter(action='download', object_id=syllabus.pk).exists())

    def test_inline_view(self):
        self.create_file_syllabus(access_type=AccessType.PUBLIC)
        response = self.client.get(self.download_url('public'), {'inline': '1'})
        self.assertTrue(response['Content-Disposition'].startswith('inline'))
        self.assertEqual(response['X-Frame-Options'], 'SAMEORIGIN')
        response.close()

    def test_embed_url_loads_in_same_origin_frame(self):
        """The PDF embedded by the display page may be framed by that page."""
        self.create_file_syllabus(access_type=AccessType.PUBLIC)
        page = self.client.get(self.index_url())
        response = self.client.get(page.context['embed_url'])
        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.get('X-Frame-Options'), 'DENY')
        response.close()

    def test_private_file_anonymous_redirects_to_login(self):
        self.create_file_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        response = self.client.get(self.download_url('private'))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('login'), response['Location'])

    def test_private_file_outsider_forbidden(self):
        self.create_file_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.outsider)
        response = self.client.get(self.download_url('private'))
        self.assertEqual(response.status_code, 403)

    def test_private_file_student(self):
        self.create_file_syllabus(SyllabusType.PRIVATE, AccessType.PRIVATE)
        self.client.force_login(self.student)
        response = self.client.get(self.download_url('private'))
        self.assertEqual(response.status_code, 200)
        response.close()

    def test_url_syllabus_redirects(self):
        self.create_url_syllabus(access_type=AccessType.PUBLIC)
        response = self.client.get(self.download_url('public'))
        self.assertRedirects(response, 'https://example.com/syllabus', fetch_redirect_response=False)
