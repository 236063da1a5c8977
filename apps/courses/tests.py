"""
Tests for course membership helpers
CSM - Course Syllabus Manager
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.courses.models import Course, Enrollment, InstructorCourse

User = get_user_model()


class CourseMembershipTest(TestCase):
    """Instructor / enrolment / participant checks"""

    @classmethod
    def setUpTestData(cls):
        cls.course = Course.objects.create(course_code='MATH101', course_name='Calculus I')
        cls.inactive_course = Course.objects.create(
            course_code='MATH999', course_name='Retired', is_active=False
        )
        cls.instructor = User.objects.create_user(username='prof', password='TestPass123!')
        cls.student = User.objects.create_user(username='learner', password='TestPass123!')
        cls.dropped = User.objects.create_user(username='dropped', password='TestPass123!')

        InstructorCourse.objects.create(instructor=cls.instructor, course=cls.course)
        InstructorCourse.objects.create(instructor=cls.instructor, course=cls.inactive_course)
        Enrollment.objects.create(student=cls.student, course=cls.course)
        Enrollment.objects.create(student=cls.dropped, course=cls.course, is_active=False)

    def test_course_str(self):
        self.assertEqual(str(self.course), 'MATH101 - Calculus I')

    def test_instructor_is_participant(self):
        self.assertTrue(self.course.is_instructor(self.instructor))
        self.assertTrue(self.course.is_participant(self.instructor))
        self.assertFalse(self.course.is_enrolled(self.instructor))

    def test_active_enrolment(self):
        self.assertTrue(self.course.is_enrolled(self.student))
        self.assertTrue(self.course.is_participant(self.student))

    def test_inactive_enrolment(self):
        """A dropped enrolment no longer counts as participation."""
        self.assertFalse(self.course.is_enrolled(self.dropped))
        self.assertFalse(self.course.is_participant(self.dropped))

    def test_anonymous_never_participates(self):
        self.assertFalse(self.course.is_participant(AnonymousUser()))

    def test_courses_for_instructor_skips_inactive(self):
        courses = Course.objects.get_courses_for_instructor(self.instructor)
        self.assertQuerySetEqual(courses, [self.course])

    def test_courses_for_student(self):
        self.assertQuerySetEqual(Course.objects.get_courses_for_student(self.student), [self.course])
        self.assertFalse(Course.objects.get_courses_for_student(self.dropped).exists())
