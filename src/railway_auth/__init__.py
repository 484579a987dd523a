"""
railway_auth — username/password authentication as a railway pipeline.

Validates the input, looks the user up, checks the password, sends a
sign-in confirmation, and records the attempt. Each step is a fallible
operation composed with the `railway` combinators, so the first failure
short-circuits everything after it.
"""

__version__ = "0.1.0"
