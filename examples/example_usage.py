"""Example: use the service layer without Flask.

Prints the safe-to-miss buffer and the weekly trend for the seeded demo student.
"""

import importlib

from config import get_settings_module

from src.campus_attend.campus_attend.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.buffer_service.compute_buffer(student_id=3, subject_id=1).to_dict())
    print([c.to_dict() for c in container.trend_service.compute_trend(student_id=3)])


if __name__ == "__main__":
    main()
