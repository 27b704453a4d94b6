"""Yadnus Consultant site API.

Webinar management with YouTube Live and Zoom stream provisioning, plus the
public form capture endpoints of the marketing site.
"""

__version__ = "1.0.0"
