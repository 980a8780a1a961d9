# Routes package init
"""
Showcase Backend — API Routes Package
======================================

Route Inventory (all under /api):
    - projects.py:    GET/POST /projects, DELETE /projects/{id}
    - clients.py:     GET/POST /clients, DELETE /clients/{id}
    - contacts.py:    POST /contact, GET /contacts, DELETE /contacts/{id}
    - newsletter.py:  POST /newsletter, GET /newsletters, DELETE /newsletters/{id}
    - health.py:      GET /health

Routes are thin: they extract request data, call a service and pick the
status code. Business rules live in showcase.services.
"""
