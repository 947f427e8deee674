"""Protocol header names."""

INERTIA = "X-Inertia"
PARTIAL_DATA = "X-Inertia-Partial-Data"
PARTIAL_COMPONENT = "X-Inertia-Partial-Component"
LOCATION = "X-Inertia-Location"
VARY = "Vary"
