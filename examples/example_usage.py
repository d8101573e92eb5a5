"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    try:
        result = container.attendance_service.record(
            emp_id="E1",
            emp_name="Alice",
            attendance_type="Sick Leave",
            from_date="2024-01-10",
            to_date="2024-01-12",
        )
        print(result.to_dict())
        for r in container.attendance_service.list_for_employee("E1"):
            print(r.to_dict())
        print(container.attendance_service.get_stats().to_dict())
    finally:
        container.close()


if __name__ == "__main__":
    main()
