"""DailyDairy administration console.

This package is organized by feature modules (suppliers, purchases, sales,
dashboard, ...) with a thin Flask controller layer on top of services and
REST-backed repositories.
"""
