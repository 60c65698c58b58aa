"""Users app package.

This module initializes the users app: the custom user model, the
companies that own hotels, role groups (Admin, Company, Customer), the
identity endpoints and the admin-area user management API. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
