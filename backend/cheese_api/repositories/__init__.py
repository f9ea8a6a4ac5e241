# Repositories package init
"""
Cheese Catalog Backend — Persistence Layer
============================================

What:  Narrow store interfaces over the database.
How:   Each repository owns a session factory and runs every call in its own
       short-lived session, committing before it returns.

Repository Inventory:
    - CheeseStore (protocol): save / find_by_id / find_all / exists_by_id / delete_by_id
    - CheeseRepository: SQLAlchemy implementation of CheeseStore
"""
