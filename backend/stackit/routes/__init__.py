# Routes package init
"""
StackIt Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:          /api/auth           register, login, own profile
    - questions.py:     /api/questions      list/detail/CRUD, my-*, vote
    - answers.py:       /api/answers        per-question list, CRUD, vote, accept
    - users.py:         /api/users          public profiles and their content
    - tags.py:          /api/tags           tag picker
    - notifications.py: /api/notifications  inbox, read/delete
    - admin.py:         /api/admin          admin-only overview and deletion
    - health.py:        /health             liveness + database probe

Routes stay thin: parse the request, call one service method, return its
response model. Permissions and counters live in the services.
"""
