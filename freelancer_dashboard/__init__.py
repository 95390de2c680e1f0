"""
Freelancer Dashboard - Source Package

A single-user dashboard for freelancers: clients, projects and simple
earnings statistics, persisted in a local key-value store keyed by username.

DESIGN PRINCIPLES:
1. Every change goes through a named command
2. Every command saves the user's whole data blob
3. Reads never fail, malformed data reads as empty
4. Failed writes are rolled back and shown, never swallowed
5. Statistics are recomputed, never stored
"""

__version__ = "1.0.0"
__author__ = "Freelancer Dashboard Team"
