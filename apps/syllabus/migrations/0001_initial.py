from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

import apps.syllabus.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('courses', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Syllabus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('syllabus_type', models.CharField(choices=[('public', 'Syllabus'), ('private', 'Restricted syllabus')], max_length=10, verbose_name='Type')),
                ('access_type', models.PositiveSmallIntegerField(choices=[(1, 'General public (no login required)'), (2, 'Community (login required)'), (3, 'Enrolled participants only')], verbose_name='Access')),
                ('display_name', models.CharField(default='Syllabus', max_length=255, verbose_name='Display name')),
                ('local_file', models.FileField(blank=True, max_length=500, upload_to=apps.syllabus.models.syllabus_upload_to, verbose_name='File')),
                ('url', models.URLField(blank=True, max_length=1000, verbose_name='URL')),
                ('is_preview', models.BooleanField(default=False, help_text='This is not a complete version of the syllabus.', verbose_name='Preview')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('time_modified', models.DateTimeField(auto_now=True, verbose_name='Last modified')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='syllabi', to='courses.course', verbose_name='Course')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_syllabi', to=settings.AUTH_USER_MODEL, verbose_name='Uploaded by')),
            ],
            options={
                'verbose_name': 'Syllabus',
                'verbose_name_plural': 'Syllabi',
                'db_table': 'syllabi',
                'ordering': ['course', 'syllabus_type'],
                'permissions': [('manage_syllabus', 'Can add, edit, and delete the syllabus of a course')],
                'constraints': [
                    models.UniqueConstraint(fields=('course', 'syllabus_type'), name='uniq_syllabus_course_type'),
                    models.CheckConstraint(condition=models.Q(models.Q(('access_type', 3), ('syllabus_type', 'private')), models.Q(('access_type__in', [1, 2]), ('syllabus_type', 'public')), _connector='OR'), name='chk_syllabus_access_matches_type'),
                    models.CheckConstraint(condition=models.Q(models.Q(('local_file', ''), models.Q(('url', ''), _negated=True)), models.Q(models.Q(('local_file', ''), _negated=True), ('url', '')), _connector='OR'), name='chk_syllabus_single_source'),
                ],
            },
        ),
    ]
