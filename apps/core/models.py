"""
Core models
CSM - Course Syllabus Manager

=== Models ===
- AuditLog: who did what to which object, and from where
"""

import logging
from django.db import models
from django.conf import settings

logger = logging.getLogger('core')


class AuditLog(models.Model):
    """
    Audit trail for user actions (views, uploads, deletes, conversions).
    Rows are append-only; the admin exposes them read-only.
    """
    ACTION_CHOICES = [
        ('view', 'View'),
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('convert', 'Convert'),
        ('download', 'Download'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name='User'
    )
    action = models.CharField(
        max_length=20,
        choices=ACTION_CHOICES,
        verbose_name='Action'
    )
    model_name = models.CharField(
        max_length=100,
        verbose_name='Model'
    )
    object_id = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        verbose_name='Object ID'
    )
    object_repr = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Object'
    )
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        verbose_name='IP address'
    )
    user_agent = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='User agent'
    )
    timestamp = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Timestamp'
    )

    class Meta:
        db_table = 'audit_logs'
        verbose_name = 'Audit log'
        verbose_name_plural = 'Audit logs'
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['model_name', 'object_id'], name='idx_audit_object'),
            models.Index(fields=['action', 'timestamp'], name='idx_audit_action_date'),
        ]

    def __str__(self):
        return f"{self.action} {self.model_name}#{self.object_id}"

    @classmethod
    def log(cls, user, action, model_name, object_id=None, object_repr='', request=None):
        """
        Record an action. Anonymous users are stored as NULL.
        """
        ip_address = None
        user_agent = ''
        if request is not None:
            ip_address = request.META.get('REMOTE_ADDR') or None
            user_agent = request.META.get('HTTP_USER_AGENT', '')[:255]

        if user is not None and not user.is_authenticated:
            user = None

        entry = cls.objects.create(
            user=user,
            action=action,
            model_name=model_name,
            object_id=object_id,
            object_repr=str(object_repr)[:255],
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.debug(f"Audit: {entry}")
        return entry
