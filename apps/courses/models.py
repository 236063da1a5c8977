"""
Course models
CSM - Course Syllabus Manager

=== Models ===
- Course: a course offering that owns a syllabus page
- InstructorCourse: instructor assignment (instructors manage the syllabus)
- Enrollment: student enrolment (active enrolment makes a participant)
"""

from django.db import models
from django.conf import settings


class CourseManager(models.Manager):

    def get_courses_for_instructor(self, user):
        return self.filter(instructor_courses__instructor=user, is_active=True).distinct()

    def get_courses_for_student(self, user):
        return self.filter(
            enrollments__student=user,
            enrollments__is_active=True,
            is_active=True,
        ).distinct()


class Course(models.Model):
    course_name = models.CharField(
        max_length=255,
        verbose_name='Course name'
    )
    course_code = models.CharField(
        max_length=50,
        unique=True,
        verbose_name='Course code'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )

    objects = CourseManager()

    class Meta:
        db_table = 'courses'
        verbose_name = 'Course'
        verbose_name_plural = 'Courses'
        ordering = ['course_code']

    def __str__(self):
        return f"{self.course_code} - {self.course_name}"

    def is_instructor(self, user):
        if not user.is_authenticated:
            return False
        return self.instructor_courses.filter(instructor=user).exists()

    def is_enrolled(self, user):
        if not user.is_authenticated:
            return False
        return self.enrollments.filter(student=user, is_active=True).exists()

    def is_participant(self, user):
        """Enrolled students and assigned instructors take part in the course."""
        return self.is_enrolled(user) or self.is_instructor(user)


class InstructorCourse(models.Model):
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='instructor_courses',
        verbose_name='Instructor'
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='instructor_courses',
        verbose_name='Course'
    )
    assigned_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Assigned at'
    )

    class Meta:
        db_table = 'instructor_courses'
        unique_together = ('instructor', 'course')
        verbose_name = 'Instructor assignment'
        verbose_name_plural = 'Instructor assignments'

    def __str__(self):
        return f"{self.instructor} -> {self.course.course_code}"


class Enrollment(models.Model):
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='enrollments',
        verbose_name='Student'
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='enrollments',
        verbose_name='Course'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    enrolled_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Enrolled at'
    )

    class Meta:
        db_table = 'enrollments'
        unique_together = ('student', 'course')
        verbose_name = 'Enrollment'
        verbose_name_plural = 'Enrollments'
        indexes = [
            models.Index(fields=['course', 'is_active'], name='idx_enrol_course_active'),
        ]

    def __str__(self):
        return f"{self.student} in {self.course.course_code}"
