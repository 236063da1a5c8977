"""
Template tags for the syllabus pages
CSM - Course Syllabus Manager

Usage in templates:
    {% load syllabus_tags %}

    <i class="{{ syllabus|access_icon }}" title="{% access_label syllabus %}"></i>
    {% syllabus_string 'make_private' %}
"""

from django import template

from ..models import AccessType
from ..strings import get_string

register = template.Library()

ACCESS_ICONS = {
    AccessType.PUBLIC: ('bi bi-globe', 'icon_public_world_syllabus'),
    AccessType.LOGGEDIN: ('bi bi-people', 'icon_public_loggedin_syllabus'),
    AccessType.PRIVATE: ('bi bi-lock', 'icon_private_syllabus'),
}


@register.filter
def access_icon(syllabus):
    """
    Icon class for the access level of a syllabus

    Usage:
        <i class="{{ syllabus|access_icon }}"></i>
    """
    if syllabus is None:
        return ''
    icon, _ = ACCESS_ICONS.get(syllabus.access_type, ('', None))
    return icon


@register.simple_tag
def access_label(syllabus):
    if syllabus is None:
        return ''
    entry = ACCESS_ICONS.get(syllabus.access_type)
    if entry is None:
        return ''
    return get_string(entry[1])


@register.simple_tag
def syllabus_string(key, **kwargs):
    return get_string(key, **kwargs)
