"""Front-desk application for the hospital backend.

This package contains the models, serializers, views, route registrations
and schema tooling behind the ``/api`` endpoints used by the front-end.
"""
