from django.apps import AppConfig


class SyllabusConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.syllabus'
    verbose_name = 'Course syllabus'

    def ready(self):
        """Register Django signals once the app is ready"""
        import apps.syllabus.signals  # noqa: F401
