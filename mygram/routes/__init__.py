# Routes package init
"""
MyGram Backend — API Routes Package
=====================================

What:  HTTP route handlers.

Route Inventory:
    - users.py:          /users/register, /users/login, /users CRUD
    - photos.py:         /photos CRUD
    - comments.py:       /comments CRUD
    - social_medias.py:  /socialmedias CRUD
    - health.py:         GET /health

Routes stay thin: parse the request, resolve the session, call a service.
"""
