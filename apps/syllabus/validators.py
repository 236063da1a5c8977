"""
Upload validators for syllabus files
CSM - Course Syllabus Manager
"""

import logging

import pdfplumber
from django.conf import settings
from django.core.exceptions import ValidationError

from .strings import get_string

logger = logging.getLogger('syllabus')


def validate_file_size(upload):
    limit = settings.SYLLABUS_MAX_UPLOAD_SIZE
    if upload.size > limit:
        raise ValidationError(
            get_string('err_file_too_large', size_mb=limit // (1024 * 1024)),
            code='file_too_large',
        )


def validate_pdf(upload):
    """
    Make sure the upload opens as a PDF with at least one page.
    The stream is rewound afterwards so the file can still be stored.
    """
    try:
        upload.seek(0)
        with pdfplumber.open(upload) as pdf:
            page_count = len(pdf.pages)
    except Exception as e:
        # pdfminer raises a wide range of parser errors for non-PDF input
        logger.warning(f"Rejected syllabus upload '{upload.name}': {e}")
        raise ValidationError(get_string('err_file_not_pdf'), code='invalid_pdf') from e
    finally:
        upload.seek(0)

    if page_count == 0:
        raise ValidationError(get_string('err_file_not_pdf'), code='invalid_pdf')
    return page_count
