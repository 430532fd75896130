"""
Agenda - provider appointment booking service.
"""
