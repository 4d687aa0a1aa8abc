# Services package init
"""
Employee API - Services Layer
==============================

What:  The layer between routes (HTTP) and the Beanie Document (persistence).

Service Inventory:
    - EmployeeService: presence checks and one ODM call per CRUD operation

Why separate from routes:
    The service can be unit-tested by patching the Employee Document,
    without an HTTP client or a running MongoDB.
"""
