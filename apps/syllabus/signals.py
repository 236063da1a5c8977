"""
Django signals for stored syllabus files
CSM - Course Syllabus Manager

=== Triggers ===
1. Syllabus deleted -> remove its stored PDF
2. Syllabus saved with a different file (or switched to a URL) -> remove the old PDF

Files are removed only once the transaction commits, so a rolled-back
change never loses the file the database still points at.
"""

import logging
from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

logger = logging.getLogger('syllabus')


def remove_stored_file(storage, name):
    if not name:
        return
    try:
        if storage.exists(name):
            storage.delete(name)
            logger.info(f"Removed stored syllabus file '{name}'")
    except OSError as e:
        logger.error(f"Failed to remove stored syllabus file '{name}': {e}")


@receiver(post_delete, sender='syllabus.Syllabus')
def handle_syllabus_delete(sender, instance, **kwargs):
    """
    Signal: remove the PDF of a deleted syllabus
    """
    if instance.local_file:
        storage = instance.local_file.storage
        name = instance.local_file.name
        transaction.on_commit(lambda: remove_stored_file(storage, name))


@receiver(pre_save, sender='syllabus.Syllabus')
def handle_syllabus_file_change(sender, instance, **kwargs):
    """
    Signal: remember the previous file when an upload replaces it
    """
    if not instance.pk:
        return
    try:
        old_instance = sender.objects.only('local_file').get(pk=instance.pk)
    except sender.DoesNotExist:
        return

    old_name = old_instance.local_file.name
    if old_name and old_name != instance.local_file.name:
        instance._stale_file = (old_instance.local_file.storage, old_name)


@receiver(post_save, sender='syllabus.Syllabus')
def handle_syllabus_file_replaced(sender, instance, created, **kwargs):
    """
    Signal: remove the replaced file after the new one is stored
    """
    stale = getattr(instance, '_stale_file', None)
    if stale is None:
        return
    instance._stale_file = None
    storage, name = stale
    transaction.on_commit(lambda: remove_stored_file(storage, name))
