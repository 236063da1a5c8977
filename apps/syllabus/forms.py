"""
Syllabus upload form
CSM - Course Syllabus Manager

=== Forms ===
SyllabusForm: add or edit the public or the private syllabus of a course
- exactly one source: a PDF upload or a URL (the file wins if both are sent)
- the public syllabus picks its access level and may be marked as a preview
- only one public syllabus per course; editing goes through entry_id
"""

from django import forms
from django.conf import settings
from django.core.validators import FileExtensionValidator

from .models import AccessType, DEFAULT_DISPLAY_NAME, SyllabusType
from .strings import STRINGS
from .validators import validate_file_size, validate_pdf


class SyllabusForm(forms.Form):

    syllabus_type = forms.ChoiceField(
        choices=SyllabusType.choices,
        widget=forms.HiddenInput()
    )
    entry_id = forms.IntegerField(
        required=False,
        widget=forms.HiddenInput()
    )
    display_name = forms.CharField(
        label=STRINGS['display_name'],
        max_length=255,
        initial=DEFAULT_DISPLAY_NAME,
        error_messages={'required': STRINGS['display_name_none_entered']},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    source_file = forms.FileField(
        label=STRINGS['file'],
        required=False,
        help_text=STRINGS['upload_file'],
        validators=[
            FileExtensionValidator(
                allowed_extensions=[ext.lstrip('.') for ext in settings.SYLLABUS_ALLOWED_EXTENSIONS]
            ),
            validate_file_size,
        ],
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': 'application/pdf'})
    )
    source_url = forms.URLField(
        label=STRINGS['url'],
        required=False,
        max_length=1000,
        assume_scheme='https',
        error_messages={'invalid': STRINGS['err_invalid_url']},
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://'})
    )
    access_type = forms.TypedChoiceField(
        label=STRINGS['access'],
        choices=[
            (AccessType.PUBLIC.value, STRINGS['access_public_info']),
            (AccessType.LOGGEDIN.value, STRINGS['access_loggedin_info']),
        ],
        coerce=int,
        empty_value=None,
        required=False,
        error_messages={'invalid_choice': STRINGS['access_invalid']},
        widget=forms.RadioSelect()
    )
    is_preview = forms.BooleanField(
        label=STRINGS['preview_info'],
        required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'})
    )

    def __init__(self, *args, **kwargs):
        self.manager = kwargs.pop('manager', None)
        syllabus_type = kwargs.pop('syllabus_type', None)
        instance = kwargs.pop('instance', None)
        super().__init__(*args, **kwargs)

        if instance is not None:
            syllabus_type = instance.syllabus_type
            self.initial.update({
                'entry_id': instance.pk,
                'display_name': instance.display_name,
                'source_url': instance.url,
                'access_type': instance.access_type if instance.is_public else None,
                'is_preview': instance.is_preview,
            })
        if syllabus_type:
            self.initial['syllabus_type'] = syllabus_type
        self.instance = instance

    def clean_source_file(self):
        upload = self.cleaned_data.get('source_file')
        if upload:
            validate_pdf(upload)
        return upload

    def clean(self):
        cleaned_data = super().clean()
        syllabus_type = cleaned_data.get('syllabus_type')
        entry_id = cleaned_data.get('entry_id')
        source_file = cleaned_data.get('source_file')
        source_url = cleaned_data.get('source_url')

        existing = None
        if self.manager is not None and syllabus_type:
            existing = self.manager.get_syllabi().get(syllabus_type)

        # === Editing must target this course's syllabus of this type ===
        if entry_id and (existing is None or existing.pk != entry_id):
            raise forms.ValidationError(STRINGS['err_syllabus_mismatch'], code='mismatch')

        # === One public syllabus per course ===
        if syllabus_type == SyllabusType.PUBLIC and not entry_id and existing is not None:
            raise forms.ValidationError(STRINGS['invalid_public_syllabus'], code='duplicate')

        # === Source: file wins over URL ===
        if source_file:
            cleaned_data['source_url'] = ''
        elif not source_url and 'source_url' not in self.errors and 'source_file' not in self.errors:
            has_stored_source = entry_id and existing is not None and (existing.local_file or existing.url)
            if not has_stored_source:
                self.add_error(None, forms.ValidationError(
                    STRINGS['err_file_url_not_uploaded'], code='no_source'
                ))

        # === Access ===
        if syllabus_type == SyllabusType.PUBLIC:
            if cleaned_data.get('access_type') is None and 'access_type' not in self.errors:
                self.add_error('access_type', STRINGS['access_none_selected'])
        elif syllabus_type == SyllabusType.PRIVATE:
            cleaned_data['access_type'] = AccessType.PRIVATE
            cleaned_data['is_preview'] = False

        return cleaned_data
