"""School Admin package.

This package is organized by feature modules (students, fees, attendance, ...)
with a thin Flask controller layer over service and record-store layers.
"""
