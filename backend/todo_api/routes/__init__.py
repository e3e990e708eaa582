# Routes package init
"""
Todo REST Backend — API Routes Package
========================================

Route Inventory:
    - todos.py:   GET/POST/DELETE /todos, GET/PUT/DELETE /todos/{id}
    - health.py:  GET / (welcome text), GET /health (service status)

Routes stay THIN: extract the path ID or body, call TodoService, wrap the
result. The store rules live in the services layer.
"""
