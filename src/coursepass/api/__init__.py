"""HTTP API for CoursePass."""
