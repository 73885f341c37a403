"""Card Attendance package.

RFID kiosk attendance backend organized by feature modules (users,
attendance, reconciliation, summary) with a thin Flask controller layer and
service/repository layers underneath.
"""
