"""
User-facing strings for the syllabus page
CSM - Course Syllabus Manager

Messages are looked up by key so views, forms and templates share one table.
Values are lazy translations; use get_string() to resolve and format them.

Usage:
    get_string('successful_add')
    get_string('clicktodownload', name='syllabus.pdf')
"""

from django.utils.translation import gettext_lazy as _

STRINGS = {
    'pluginname': _('Syllabus'),

    # === Upload form ===
    'syllabus_manager': _('Syllabus manager'),
    'syllabus_choice': _('If you select both a file and URL, the file will be used.'),
    'syllabus_url_file': _('Please provide a:'),
    'public_syllabus': _('Syllabus'),
    'public_syllabus_help': _('A syllabus can be available to the community (login required) '
                              'or the general public (no login required).'),
    'private_syllabus': _('Restricted syllabus'),
    'private_syllabus_help': _('A restricted syllabus is viewable only by enrolled students in the course.'),
    'url': _('URL'),
    'file': _('File'),
    'upload_file': _('Please upload a PDF'),
    'access': _('Access'),
    'access_public_info': _('General public (no login required)'),
    'access_loggedin_info': _('Community (login required)'),
    'access_none_selected': _('Please select an access type'),
    'access_invalid': _('Invalid access type selected'),
    'preview_info': _('This is not a complete version of the syllabus.'),
    'display_name': _('Display name'),
    'display_name_default': _('Syllabus'),
    'display_name_none_entered': _('Please enter a display name'),
    'invalid_public_syllabus': _('Can only have one unrestricted syllabus for the course'),
    'public_syllabus_add': _('Add syllabus'),
    'private_syllabus_add': _('Add restricted syllabus'),
    'no_syllabus': _('No syllabus uploaded yet'),
    'make_private': _('Restrict'),
    'make_public': _('Unrestrict'),
    'confirm_deletion': _('Are you sure you want to delete this syllabus?'),

    # === Displaying a syllabus ===
    'cannot_view_private_syllabus': _('This syllabus is available only to enrolled students in the course.'),
    'cannot_view_public_syllabus': _('This syllabus is available only to logged in users.'),
    'no_syllabus_uploaded': _('Syllabus is not available yet.'),
    'no_syllabus_uploaded_help': _('Please "Turn editing on" to upload a syllabus.'),
    'clicktodownload': _('Download: {name}'),
    'preview_disclaimer': _('May not reflect the complete contents of the final syllabus for this course.'),
    'private_disclaimer': _('This syllabus is available only to enrolled students in the course.'),
    'preview': _('preview'),
    'private': _('restricted'),
    'modified': _('Last modified: '),
    'turn_editing_on': _('Turn editing on'),
    'turn_editing_off': _('Turn editing off'),

    # === Success ===
    'successful_add': _('Successfully added syllabus'),
    'successful_delete': _('Successfully deleted syllabus'),
    'successful_update': _('Successfully updated syllabus'),
    'successful_restrict': _('Successfully restricted syllabus'),
    'successful_unrestrict': _('Successfully unrestricted syllabus'),

    # === Errors ===
    'err_syllabus_generic': _('Sorry, the syllabus could not be processed'),
    'err_file_not_uploaded': _('Please upload a PDF.'),
    'err_file_not_pdf': _('The uploaded file is not a readable PDF.'),
    'err_file_too_large': _('File too large. Maximum size is {size_mb} MB.'),
    'err_file_url_not_uploaded': _('Please upload a file or add a valid URL for your syllabus.'),
    'err_syllabus_mismatch': _('Selected syllabus does not belong to course'),
    'err_syllabus_not_allowed': _('Sorry, you must be logged in or associated with the course to view this syllabus'),
    'err_syllabus_notexist': _('Sorry, but given syllabus does not exist'),
    'err_noembed': _('Unable to show embedded file. Please download file to view.'),
    'err_syllabus_convert': _('Cannot convert syllabus when both a restricted and unrestricted syllabi are uploaded'),
    'err_invalid_url': _('Please enter a valid URL.'),
    'err_cannot_manage': _('Sorry, but you do not have the capability to manage syllabi for course'),

    # === Access icons ===
    'icon_public_world_syllabus': _('Syllabus (no login required)'),
    'icon_public_loggedin_syllabus': _('Syllabus (login required)'),
    'icon_private_syllabus': _('Restricted syllabus (only enrolled students)'),
}


def get_string(key, **kwargs):
    """
    Resolve a message key to its translated text.

    Unknown keys raise KeyError so typos surface in tests rather than on the page.
    """
    text = str(STRINGS[key])
    if kwargs:
        text = text.format(**kwargs)
    return text
