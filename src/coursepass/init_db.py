"""Create all CoursePass tables without running migrations."""

from coursepass.db.session import create_tables, engine


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    init_db()
    print(f"Database initialized at {engine.url.render_as_string(hide_password=True)}.")
