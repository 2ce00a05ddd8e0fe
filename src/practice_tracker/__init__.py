"""Practice Tracker package.

Recurring practice schedules and attendance reconciliation for small sports
organizations, organized by feature modules (roster, schedules, attendance,
reports) with pure engine functions, thin Flask controllers and
service/repository layers.
"""
