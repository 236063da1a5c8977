"""
Syllabus Views
CSM - Course Syllabus Manager

Views:
- SyllabusIndexView: the course syllabus page
    GET  -> display the syllabus the viewer may see (or why nothing is shown);
            managers in editing mode get the manager page instead
    POST -> action=delete / action=convert with type=public|private,
            otherwise the upload form
- SyllabusDownloadView: download or inline-view a stored syllabus file
"""

import logging

from django.contrib import messages
from django.http import FileResponse, Http404
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.clickjacking import xframe_options_sameorigin

from apps.core.models import AuditLog

from .exceptions import SyllabusError
from .forms import SyllabusForm
from .mixins import CourseSyllabusMixin
from .models import AccessType, SyllabusType
from .selection import select_for_display
from .services import CONVERSIONS
from .strings import get_string

logger = logging.getLogger('syllabus')

EDITING_SESSION_KEY = 'syllabus_editing'

ACTION_VIEW = 'view'
ACTION_DELETE = 'delete'
ACTION_CONVERT = 'convert'
ACTION_ADD = 'add'
ACTION_EDIT = 'edit'


def syllabus_view_url(course):
    return f"{reverse('syllabus:index', kwargs={'course_id': course.pk})}?action={ACTION_VIEW}"


def build_display_context(choice, can_manage):
    """
    Everything the display template needs for a DisplayChoice.
    """
    if not choice.is_visible:
        return {
            'title': get_string('display_name_default'),
            'error_text': get_string(choice.reason.message_key),
            'show_upload_help': can_manage,
        }

    syllabus = choice.syllabus
    title = syllabus.display_name
    type_text = ''
    disclaimer = ''
    if syllabus.is_public:
        if syllabus.is_preview:
            type_text = get_string('preview')
            disclaimer = get_string('preview_disclaimer')
    else:
        type_text = get_string('private')
        disclaimer = get_string('private_disclaimer')

    if type_text:
        title = f"{title} ({type_text})*"

    mimetype = syllabus.get_mimetype()
    return {
        'title': title,
        'syllabus': syllabus,
        'embed_url': syllabus.get_display_url(),
        'mimetype': mimetype,
        'is_pdf': mimetype == 'application/pdf',
        'noembed_text': get_string('err_noembed'),
        'download_url': syllabus.url or syllabus.get_download_url(),
        'download_text': syllabus.url or get_string('clicktodownload', name=syllabus.filename),
        'disclaimer': disclaimer,
        'modified_label': get_string('modified'),
    }


class SyllabusIndexView(CourseSyllabusMixin, View):
    display_template = 'syllabus/index.html'
    manage_template = 'syllabus/manage.html'

    # ============================================================
    # GET
    # ============================================================

    def get(self, request, course_id):
        edit = request.GET.get('edit')
        if edit in ('on', 'off') and self.viewer.can_manage:
            request.session[EDITING_SESSION_KEY] = edit == 'on'
            return redirect('syllabus:index', course_id=self.course.pk)

        if self.is_editing():
            return self.render_manager(self.get_requested_form())
        return self.render_display()

    def is_editing(self):
        return self.viewer.can_manage and self.request.session.get(EDITING_SESSION_KEY, False)

    def render_display(self):
        syllabi = self.manager.get_syllabi()
        choice = select_for_display(syllabi, self.viewer)

        context = build_display_context(choice, self.viewer.can_manage)
        context.update({
            'course': self.course,
            'can_manage': self.viewer.can_manage,
            'active_page': 'syllabus',
        })

        AuditLog.log(
            user=self.request.user,
            action='view',
            model_name='Syllabus',
            object_id=choice.syllabus.pk if choice.is_visible else None,
            object_repr=str(self.course),
            request=self.request,
        )
        return render(self.request, self.display_template, context)

    def get_requested_form(self):
        """Blank add form or pre-filled edit form picked by ?action=&type="""
        action = self.request.GET.get('action')
        syllabus_type = self.request.GET.get('type')
        if syllabus_type not in CONVERSIONS:
            return None

        if action == ACTION_ADD:
            return SyllabusForm(manager=self.manager, syllabus_type=syllabus_type)
        if action == ACTION_EDIT:
            syllabus = self.manager.get_syllabi().get(syllabus_type)
            if syllabus is None:
                messages.error(self.request, get_string('err_syllabus_notexist'))
                return None
            return SyllabusForm(manager=self.manager, instance=syllabus)
        return None

    def render_manager(self, form=None, status=200):
        syllabi = self.manager.get_syllabi()
        context = {
            'course': self.course,
            'title': get_string('syllabus_manager'),
            'public_syllabus': syllabi[SyllabusType.PUBLIC],
            'private_syllabus': syllabi[SyllabusType.PRIVATE],
            'can_convert': not all(syllabi.values()),
            'form': form,
            'active_page': 'syllabus',
        }
        return render(self.request, self.manage_template, context, status=status)

    # ============================================================
    # POST
    # ============================================================

    def post(self, request, course_id):
        denied = self.require_manage()
        if denied is not None:
            return denied

        if 'cancel' in request.POST:
            request.session[EDITING_SESSION_KEY] = True
            return redirect('syllabus:index', course_id=self.course.pk)

        action = request.POST.get('action')
        syllabus_type = request.POST.get('type')

        if action == ACTION_DELETE:
            return self.handle_delete(syllabus_type)
        if action == ACTION_CONVERT:
            return self.handle_convert(syllabus_type)
        return self.handle_upload()

    def handle_delete(self, syllabus_type):
        try:
            syllabus = self.manager.delete(syllabus_type)
        except SyllabusError as e:
            logger.warning(
                f"Delete refused for course {self.course.course_code} type={syllabus_type}: {e.message_key}"
            )
            messages.error(self.request, get_string(e.message_key))
            return redirect('syllabus:index', course_id=self.course.pk)

        AuditLog.log(
            user=self.request.user,
            action='delete',
            model_name='Syllabus',
            object_repr=str(syllabus),
            request=self.request,
        )
        messages.success(self.request, get_string('successful_delete'))
        return redirect(syllabus_view_url(self.course))

    def handle_convert(self, syllabus_type):
        try:
            access_type = self.manager.convert(syllabus_type)
        except SyllabusError as e:
            logger.warning(
                f"Convert refused for course {self.course.course_code} type={syllabus_type}: {e.message_key}"
            )
            messages.error(self.request, get_string(e.message_key))
            return redirect('syllabus:index', course_id=self.course.pk)

        AuditLog.log(
            user=self.request.user,
            action='convert',
            model_name='Syllabus',
            object_repr=f"{self.course} {syllabus_type} -> {AccessType(access_type).label}",
            request=self.request,
        )
        if access_type == AccessType.PRIVATE:
            messages.success(self.request, get_string('successful_restrict'))
        else:
            messages.success(self.request, get_string('successful_unrestrict'))
        return redirect(syllabus_view_url(self.course))

    def handle_upload(self):
        form = SyllabusForm(self.request.POST, self.request.FILES, manager=self.manager)
        if not form.is_valid():
            return self.render_manager(form)

        try:
            syllabus, created = self.manager.save_syllabus(form.cleaned_data, user=self.request.user)
        except SyllabusError as e:
            form.add_error(None, get_string(e.message_key))
            return self.render_manager(form)

        AuditLog.log(
            user=self.request.user,
            action='create' if created else 'update',
            model_name='Syllabus',
            object_id=syllabus.pk,
            object_repr=str(syllabus),
            request=self.request,
        )
        messages.success(
            self.request,
            get_string('successful_add' if created else 'successful_update'),
        )
        return redirect(syllabus_view_url(self.course))


# The display page embeds ?inline=1 responses in an <object>
@method_decorator(xframe_options_sameorigin, name='get')
class SyllabusDownloadView(CourseSyllabusMixin, View):
    """
    Serve a stored syllabus after the same visibility check as the page.
    URL syllabi redirect to their target.
    """

    def get(self, request, course_id, syllabus_type):
        syllabus = self.manager.get_syllabi().get(syllabus_type)
        if syllabus is None:
            raise Http404(get_string('err_syllabus_notexist'))

        if not self.viewer.can_view(syllabus.access_type):
            logger.warning(
                f"Blocked syllabus download: user={request.user.pk} "
                f"course={self.course.course_code} type={syllabus_type}"
            )
            if not request.user.is_authenticated:
                return self.handle_no_permission()
            raise PermissionDenied(get_string('err_syllabus_not_allowed'))

        AuditLog.log(
            user=request.user,
            action='download',
            model_name='Syllabus',
            object_id=syllabus.pk,
            object_repr=str(syllabus),
            request=request,
        )

        if syllabus.is_url:
            return redirect(syllabus.url)

        if not syllabus.local_file.storage.exists(syllabus.local_file.name):
            logger.error(f"Stored syllabus file missing: {syllabus.local_file.name}")
            raise Http404(get_string('err_syllabus_notexist'))

        return FileResponse(
            syllabus.local_file.open('rb'),
            as_attachment=request.GET.get('inline') != '1',
            filename=syllabus.filename,
            content_type=syllabus.get_mimetype(),
        )
