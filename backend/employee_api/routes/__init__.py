# Routes package init
"""
Employee API - Routes Package
==============================

Route Inventory:
    - employees.py:  /api/employees CRUD endpoints
    - health.py:     GET /  and  GET /health

Routes stay thin: extract input, call EmployeeService, return the result.
Status codes for failures come from the exception handlers in main.py.
"""
