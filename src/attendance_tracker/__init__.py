"""Attendance Tracker package.

Feature modules (employees, attendance, dashboard, reports) each keep pure
models/derivations, a repository interface with its MySQL implementation,
a service layer and a thin Flask JSON controller.
"""
