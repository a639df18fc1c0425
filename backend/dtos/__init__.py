"""
Data Transfer Objects (DTOs) Layer

DTOs keep database rows and domain objects out of the API contract.

Structure:
- request/: Bodies accepted by the orders API
- response/: Bodies returned by the orders API
- internal/: Plain data exchanged with the order service (projections, new items)
"""
