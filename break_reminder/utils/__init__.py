"""Utils package for Break Reminder application.

This package contains logging configuration and the Qt-backed time and
power signal sources shared across the application.
"""
