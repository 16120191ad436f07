"""Office Manager core package.

Timesheet computation and installment allocation for the office-management
application, organized by feature modules (timesheets, payroll, installments, ...)
with pure calculators, thin services/repositories and a JSON Flask layer.
"""
