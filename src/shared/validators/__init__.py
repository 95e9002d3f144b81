"""Shared validators package for the application.

Reusable validation functions used by request schemas.

Available validators:
- password.py: Password strength validation
"""
