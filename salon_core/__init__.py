"""
Salon Admin Core

Authorization and tenant-isolation core of a multi-tenant salon/spa
booking platform: sessions, principal resolution, role gating,
tenant-scoped data access, and the waitlist and consent-template
lifecycles built on top of them.
"""

__version__ = "1.0.0"
