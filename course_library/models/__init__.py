from course_library.models.author import Author
from course_library.models.course import Course

__all__ = ["Author", "Course"]
