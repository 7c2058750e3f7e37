"""CoursePass: wallet-signature login and paid course access."""

__version__ = "0.1.0"
