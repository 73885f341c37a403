"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the IN/OUT toggle and the sweep live in services.
"""

from datetime import datetime

from card_attendance.container import build_container


def main():
    container = build_container(backend="memory", timezone="Asia/Kolkata")
    container.user_service.register("Asha", "ab12c")

    for hour in (9, 18, 19):
        result = container.attendance_service.record_scan("AB12C", now=datetime(2024, 3, 1, hour, 0, 0))
        print(result.to_dict())

    print(container.reconciliation_service.sweep("2024-03-01"))
    print([r.to_dict() for r in container.summary_service.build(7, today=datetime(2024, 3, 1).date())])


if __name__ == "__main__":
    main()
