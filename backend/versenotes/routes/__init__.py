# Routes package init
"""
VerseNotes Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:        POST   /api/signup
                      POST   /api/login
    - posts.py:       POST   /api/posts
                      GET    /api/posts
    - highlights.py:  POST   /api/highlights
                      GET    /api/highlights/{user_id}
                      DELETE /api/highlights/{highlight_id}
    - health.py:      GET    /api/health

Design Principle:
    Routes are THIN: unpack the request, call one service method, return its
    response model. Failures are raised by services and turned into
    {"success": false, "message": ...} by the handlers in main.py.
"""
