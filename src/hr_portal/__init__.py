"""HR Portal package.

Feature modules (attendance, attendance_settings, biometrics, documents,
calendar_events, ...) each expose a domain model, a repository Protocol with a
MySQL implementation, a service layer and a thin Flask controller.
"""
