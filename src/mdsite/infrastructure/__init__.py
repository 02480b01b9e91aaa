"""Infrastructure layer — filesystem access and Jinja2 page templates.

The service layer bridges between domain models and infrastructure.
"""
