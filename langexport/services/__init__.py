"""Service packages for langexport."""
