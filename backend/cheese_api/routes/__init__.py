# Routes package init
"""
Cheese Catalog Backend — API Routes Package
=============================================

What:  HTTP route handlers, all mounted under settings.api_prefix (/api/v1).

Route Inventory:
    - health.py:   GET    /health
    - cheeses.py:  POST   /cheeses
                   GET    /cheeses
                   GET    /cheeses/{id}
                   PUT    /cheeses/{id}
                   DELETE /cheeses/{id}

Routes stay thin: parse the request, run the boundary validation, call
CheeseService, pick the status code. Persistence and image encoding live in
the services and repositories.
"""
