"""Presenters package for Break Reminder application.

This package contains the presenter that coordinates the scheduler model
and the tray view following the MVP (Model-View-Presenter) architecture pattern.
"""
