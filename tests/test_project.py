"""
Project-level tests for CSM - Course Syllabus Manager

Tests cover: URLs, Settings, Context Processors, Templates, Audit log
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.template.loader import get_template
from django.test import RequestFactory, TestCase
from django.urls import resolve, reverse

from apps.core.context_processors import site_settings
from apps.core.models import AuditLog
from apps.syllabus.views import SyllabusDownloadView, SyllabusIndexView

User = get_user_model()


# ============================================================================
# 1. URL Resolution
# ============================================================================

class URLResolutionTest(TestCase):
    """Test URL resolution."""

    def test_syllabus_index_url(self):
        """Syllabus page sits under the course."""
        url = reverse('syllabus:index', kwargs={'course_id': 7})
        self.assertEqual(url, '/courses/7/syllabus/')
        self.assertEqual(resolve(url).func.view_class, SyllabusIndexView)

    def test_syllabus_download_url(self):
        url = reverse('syllabus:download', kwargs={'course_id': 7, 'syllabus_type': 'private'})
        self.assertEqual(url, '/courses/7/syllabus/download/private/')
        self.assertEqual(resolve(url).func.view_class, SyllabusDownloadView)

    def test_login_url(self):
        self.assertEqual(reverse('login'), '/accounts/login/')

    def test_admin_url(self):
        self.assertEqual(reverse('admin:index'), '/csm-admin/')


# ============================================================================
# 2. Settings
# ============================================================================

class SecuritySettingsTest(TestCase):
    """Test security settings."""

    def test_csrf_cookie_httponly(self):
        self.assertTrue(settings.CSRF_COOKIE_HTTPONLY)

    def test_session_cookie_httponly(self):
        self.assertTrue(settings.SESSION_COOKIE_HTTPONLY)

    def test_secure_referrer_policy(self):
        self.assertEqual(settings.SECURE_REFERRER_POLICY, 'strict-origin-when-cross-origin')


class SyllabusSettingsTest(TestCase):
    """Upload settings used by the syllabus form."""

    def test_only_pdf_allowed(self):
        self.assertEqual(settings.SYLLABUS_ALLOWED_EXTENSIONS, ['.pdf'])

    def test_upload_limit_positive(self):
        self.assertGreater(settings.SYLLABUS_MAX_UPLOAD_SIZE, 0)

    def test_syllabus_logger_configured(self):
        self.assertIn('syllabus', settings.LOGGING['loggers'])


# ============================================================================
# 3. Context Processors
# ============================================================================

class ContextProcessorTest(TestCase):
    """Test context processors."""

    def setUp(self):
        self.factory = RequestFactory()

    def test_site_settings(self):
        request = self.factory.get('/')
        context = site_settings(request)
        self.assertEqual(context['SITE_NAME'], 'CSM')
        self.assertIn('SITE_VERSION', context)
        self.assertIn('DEBUG', context)


# ============================================================================
# 4. Templates
# ============================================================================

class TemplateExistenceTest(TestCase):
    """Templates load and extend the site layout."""

    def test_base_template(self):
        self.assertIsNotNone(get_template('base.html'))

    def test_syllabus_templates(self):
        for name in ('syllabus/index.html', 'syllabus/manage.html', 'registration/login.html'):
            with self.subTest(template=name):
                self.assertIsNotNone(get_template(name))

    def test_login_page_renders(self):
        response = self.client.get(reverse('login'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'base.html')


# ============================================================================
# 5. Audit log
# ============================================================================

class AuditLogTest(TestCase):
    """AuditLog.log records who did what."""

    def test_anonymous_stored_as_null(self):
        request = RequestFactory().get('/', HTTP_USER_AGENT='pytest-agent')
        log = AuditLog.log(
            user=AnonymousUser(), action='view', model_name='Syllabus', request=request
        )
        self.assertIsNone(log.user)
        self.assertEqual(log.ip_address, '127.0.0.1')
        self.assertEqual(log.user_agent, 'pytest-agent')

    def test_authenticated_user_kept(self):
        user = User.objects.create_user(username='auditor', password='TestPass123!')
        log = AuditLog.log(user=user, action='delete', model_name='Syllabus', object_repr='CS101')
        self.assertEqual(log.user, user)
        self.assertEqual(str(log), 'delete Syllabus#None')
