"""
Dropman API - JSON endpoints for the registration page and staff screens.

Usage:
    INSTALLED_APPS = [
        ...
        "dropman",
        "dropman.contrib.api",
    ]

    urlpatterns = [
        path("api/", include("dropman.contrib.api.urls")),
    ]
"""
