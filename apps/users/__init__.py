"""Users app package.

Staff accounts, roles and JWT authentication. Use
``apps.users.models.User`` as the AUTH_USER_MODEL throughout the project.
"""
