"""
Scheduling Domain

Provider appointment booking: entities, ports, the booking use case and its
SQLAlchemy / Redis adapters.
"""
