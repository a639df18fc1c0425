"""
Domain Layer

This package contains the order domain logic, separated from
persistence concerns and infrastructure.

Structure:
- entities/: Objects owned by an aggregate (OrderItem)
- value_objects/: Immutable value types without identity (OrderStatus)
- aggregates/: Aggregate roots that group related entities (Order)
- exceptions.py: Domain rule violations
"""
