"""
Pulseboard: business metrics dashboard API.

Serves categorized metrics with formatted values, delta badges and sparkline
series from a pluggable data adapter.
"""

__version__ = "0.1.0"
