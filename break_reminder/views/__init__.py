"""Views package for Break Reminder application.

This package contains the Qt user interface classes.
"""
