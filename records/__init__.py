"""Administrative records application for the SUD EMR backend.

This package holds the models, serializers, services, views and route
registrations for banks, system settings, HMOs, billing, claims and
pharmacy stock.
"""
