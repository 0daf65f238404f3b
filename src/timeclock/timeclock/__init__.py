"""Timeclock package.

Employee time tracking organized by feature modules (events, timesheet,
payroll, attendance, ...). The calculation engine is pure and storage
agnostic; a thin Flask controller layer sits on top of service/repository
layers.
"""
