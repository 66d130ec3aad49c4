"""
Volunteer Hub API

Matches volunteers to companies through an apply / approve workflow, with
password signup, bearer-token sessions and SMS notification on acceptance.
"""

__version__ = "0.1.0"
