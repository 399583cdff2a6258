"""Intern register backend: authentication, leave requests and attendance."""
